# app_builder/core/mock_ui.py
"""
Mock UI view model for an extracted AppSpec.

Each role action becomes a view the browser can render without further
lookups: a form (labelled inputs), a table (columns + sample rows), or
nothing for 'none' actions and actions pointing at an unknown entity.
"""
import re
from typing import Any, Dict, List, Optional

from faker import Faker

from app_builder.models import Action, ActionView, AppSpec, Entity, FieldView, PreviewResponse, RoleView

SAMPLE_ROWS = 3

_INPUT_TYPES = {
    "text": "textarea",
    "id": "number",
    "number": "number",
    "date": "date",
    "boolean": "checkbox",
}


def input_type_for(field_type: Any) -> str:
    if not field_type or not isinstance(field_type, str):
        return "text"
    return _INPUT_TYPES.get(field_type.lower(), "text")


def snake_to_title(s: str) -> str:
    words = re.split(r"[_\s]+", s)
    return " ".join(w[:1].upper() + w[1:].lower() for w in words if w)


def sample_value(field_type: str, fake: Faker) -> Any:
    if field_type == "id":
        return fake.random_int(min=0, max=999)
    if field_type == "string":
        return " ".join(fake.words())
    if field_type == "first_name":
        return fake.first_name()
    if field_type == "last_name":
        return fake.last_name()
    if field_type == "name":
        return fake.name()
    if field_type == "email":
        return fake.email()
    if field_type == "text":
        return "\n".join(fake.sentences())
    if field_type == "number":
        return fake.random_int(min=0, max=99)
    if field_type == "date":
        return fake.past_datetime().isoformat()
    if field_type == "boolean":
        return fake.random_element(("0", "1"))
    return "..."


def sample_rows(entity: Entity, fake: Faker, count: int = SAMPLE_ROWS) -> List[Dict[str, Any]]:
    return [{f.name: sample_value(f.type, fake) for f in entity.fields} for _ in range(count)]


def build_action_view(app: AppSpec, action: Action, fake: Optional[Faker] = None) -> ActionView:
    entity = app.find_entity(action.entity)
    if action.type == "none" or entity is None:
        return ActionView(action=action.name, kind="none")

    fields = [
        FieldView(name=f.name, label=snake_to_title(f.name), type=f.type, input_type=input_type_for(f.type))
        for f in entity.fields
    ]
    if action.type == "form":
        return ActionView(action=action.name, kind="form", entity=entity.name, fields=fields)

    fake = fake or Faker()
    return ActionView(
        action=action.name,
        kind="table",
        entity=entity.name,
        fields=fields,
        columns=[f.name for f in entity.fields],
        rows=sample_rows(entity, fake),
    )


def build_role_views(app: AppSpec, seed: Optional[int] = None) -> List[RoleView]:
    fake = Faker()
    if seed is not None:
        fake.seed_instance(seed)
    return [
        RoleView(role=role.name, actions=[build_action_view(app, a, fake) for a in role.actions])
        for role in app.roles
    ]


def build_preview(app: AppSpec, seed: Optional[int] = None) -> PreviewResponse:
    return PreviewResponse(app_name=app.app_name, detected=not app.is_empty(), roles=build_role_views(app, seed))

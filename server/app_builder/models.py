from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

FieldType = Literal[
    "id", "string", "first_name", "last_name", "name",
    "email", "text", "number", "date", "boolean",
]
ActionType = Literal["form", "table", "none"]

MAX_ENTITIES = 10
MAX_FIELDS = 10
MAX_ROLES = 5
MAX_ACTIONS = 5


class _Frozen(BaseModel):
    # never mutated after validation
    model_config = ConfigDict(frozen=True, extra="ignore")


class EntityField(_Frozen):
    name: StrictStr = Field(..., description="snake_case field name")
    type: FieldType = Field(..., description="Field data type")


class Entity(_Frozen):
    name: StrictStr = Field(..., description="Entity name")
    fields: List[EntityField] = Field(..., max_length=MAX_FIELDS)


class Action(_Frozen):
    name: StrictStr = Field(..., description="Verb or verb-noun phrase, e.g. 'Create Invoice'")
    entity: StrictStr = Field(..., description="Name of the entity the action acts upon")
    type: ActionType = Field(..., description="form | table | none")


class Role(_Frozen):
    name: StrictStr = Field(..., description="Role name")
    actions: List[Action] = Field(..., max_length=MAX_ACTIONS)


class AppSpec(_Frozen):
    """
    Root schema returned by /api/extract.
    Also passed to the chat model as the structured-output schema.
    """
    app_name: StrictStr = Field(..., description="App name")
    entities: List[Entity] = Field(..., max_length=MAX_ENTITIES)
    roles: List[Role] = Field(..., max_length=MAX_ROLES)

    def find_entity(self, name: str) -> Optional[Entity]:
        for ent in self.entities:
            if ent.name == name:
                return ent
        return None

    def is_empty(self) -> bool:
        """True when the model found no app in the description."""
        return not self.app_name.strip() or not self.entities or not self.roles


# -------------------------
# Request / response bodies
# -------------------------
class ExtractRequest(BaseModel):
    description: str


class FieldView(BaseModel):
    name: str
    label: str
    type: str
    input_type: str


class ActionView(BaseModel):
    action: str
    kind: str  # form | table | none
    entity: Optional[str] = None
    fields: List[FieldView] = []
    columns: List[str] = []
    rows: List[Dict[str, Any]] = []


class RoleView(BaseModel):
    role: str
    actions: List[ActionView] = []


class PreviewResponse(BaseModel):
    app_name: str
    detected: bool
    roles: List[RoleView] = []

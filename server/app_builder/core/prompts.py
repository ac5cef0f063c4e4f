# app_builder/core/prompts.py
"""
Prompts used by the extract pipeline.

Goals:
- Force a single JSON object the backend can parse, shaped like AppSpec.
- Spell out what each field type means so the mock UI can pick input widgets.
- Keep the model quiet (empty object) when the description is not about an app.
"""

import json

from app_builder.models import MAX_ACTIONS, MAX_ENTITIES, MAX_FIELDS, MAX_ROLES

SCHEMA_EXAMPLE = {
    "app_name": "App Name",
    "entities": [
        {
            "name": "Entity Name",
            "fields": [
                {"name": "field_name", "type": "id|string|first_name|last_name|name|email|text|number|date|boolean"}
            ],
        }
    ],
    "roles": [
        {
            "name": "Role Name",
            "actions": [
                {"name": "Action Name", "entity": "Entity Name", "type": "form|table|none"}
            ],
        }
    ],
}


def build_system_prompt() -> str:
    """
    Instruction prompt for the requirements extractor.
    The description itself is sent separately as the user message.
    """
    return (
        "Given a short description of an app, output exactly one valid JSON object modelling the requirements of the app.\n"
        "Each entity should reflect the data the app needs to store.\n"
        "\"id\" should be used for any database table primary keys.\n"
        "\"first_name\", \"last_name\", and \"name\" should be used for person names.\n"
        "\"email\" should be used for email addresses, \"number\" for numeric values, \"date\" for dates and times, "
        "\"boolean\" for yes/no flags, and \"string\" for any other short text.\n"
        "\"text\" should be used for long text that usually spans multiple lines.\n"
        "Each role should have a list of actions they can perform that views or modifies other entities.\n"
        "Each action should be a simple verb or verb-noun phrase like \"Create Invoice\" or \"View Reports\".\n"
        "Each action should have a corresponding entity that it acts upon and an action type.\n"
        "An action type is \"form\" if it adds an instance of an entity, \"table\" if it requires viewing instances "
        "of an entity, and \"none\" if it is more complex or does not directly relate to an entity like "
        "\"Generate Report\" or \"Manage Users\".\n"
        "Any \"none\" type actions should appear at the end of the action list for a role.\n"
        f"The role list can have at most {MAX_ROLES} items and each action list at most {MAX_ACTIONS} items, "
        f"while the entity list can have at most {MAX_ENTITIES} items and each field list at most {MAX_FIELDS} items.\n"
        "Only include the most important items, keeping it as simple as required.\n"
        "If a value is unknown, use reasonable defaults.\n"
        "If the user input is unrelated to app requirements, do not return anything, or return an empty object.\n"
        "The JSON object must follow this schema:\n\n"
        f"{json.dumps(SCHEMA_EXAMPLE, indent=2)}"
    )


def truncate_description(description: str, limit: int) -> str:
    return description[:limit]


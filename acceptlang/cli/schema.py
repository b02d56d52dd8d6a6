"""Supported languages file schema."""
import jsonschema

_languages = {
    "type": "array",
    "items": {
        "type": "string",
        "minLength": 1,
    },
}

schema = {
    "oneOf": [
        _languages,
        {
            "type": "object",
            "properties": {
                "languages": _languages,
            },
            "required": ["languages"],
        },
    ],
}

schema_validator = jsonschema.Draft4Validator(schema)

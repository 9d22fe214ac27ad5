from .tools import register, list_schemas, show_schema, doctor_schema

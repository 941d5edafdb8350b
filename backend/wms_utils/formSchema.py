def generate_schema_from_model(schema):
    """Describe an entity's form inputs for the client.

    Select fields without fixed choices (worker, department, trade and
    training pickers) are left with empty ``options``; the client fills them
    from the related collections.
    """
    fields = []

    for field in schema.fields:
        field_schema = {
            "name": field.name,
            "label": field.label,
            "type": field.type,
            "required": field.required,
        }

        if field.type == "select":
            field_schema["options"] = [
                {"label": choice, "value": choice} for choice in (field.choices or [])
            ]
            if not field.choices:
                field_schema["depends_on"] = field.name

        elif field.type == "number":
            if field.min is not None:
                field_schema["min"] = field.min
            if field.max is not None:
                field_schema["max"] = field.max

        if field.pattern is not None:
            field_schema["pattern"] = field.pattern.pattern

        if field.default is not None:
            field_schema["default"] = field.default

        # the key of an existing record is not editable
        if field.name == schema.key and not schema.is_register:
            field_schema["readonly_on_edit"] = True

        fields.append(field_schema)

    return {
        "model": schema.name,
        "endpoint": schema.endpoint,
        "fields": fields,
    }

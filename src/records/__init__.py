"""Income records: data model, field aliases and value coercion."""

"""UI-agnostic comparison core: models, diff engine, row mapping and rendering."""

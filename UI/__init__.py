"""Rich-рендерери поверх `core/`."""

"""Client side of the HR admin tool: values normalization, sync and directory state."""

"""Task tracker widget: task list state, persistence and theme preference."""

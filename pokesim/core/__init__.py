"""Battle engine core: rules, state and event log."""

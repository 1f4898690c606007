"""Headless simulation core: physics, entities, level layout and round rules."""

"""Script execution primitives: escaping, the osascript executor, the log sink and
the hierarchical listing parser."""

"""Core of pluginlog: argument handling, rules, engine and scope registry."""

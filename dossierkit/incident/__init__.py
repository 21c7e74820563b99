"""Incident log parsing, timelines, redaction and packet rendering."""
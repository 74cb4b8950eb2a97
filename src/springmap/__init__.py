"""Heuristic structure extraction and relationship graphs for Java/Spring projects."""

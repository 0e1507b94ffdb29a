"""Dependency-ordered task workflows with a shared context."""
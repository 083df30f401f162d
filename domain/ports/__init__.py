"""Collaborator contracts the bootstrap depends on."""

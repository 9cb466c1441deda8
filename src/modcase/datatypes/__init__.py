"""Data types shared by the announcer, its collaborators and the database layer."""

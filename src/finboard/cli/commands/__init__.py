"""Command groups for the Finboard CLI."""

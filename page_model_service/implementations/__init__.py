"""Default collaborator implementations for the page model gateway."""

"""Text extraction for uploaded assessment documents."""

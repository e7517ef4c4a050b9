"""Applications built on the betting tools clients."""

"""Template discovery, the function registry, and bundle compilation."""

"""Infrastructure layer: storage backends, DB pool, schema."""

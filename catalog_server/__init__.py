"""HTTP service for the dynamic catalog manager."""

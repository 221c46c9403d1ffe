"""Medicine adherence tracking service."""

"""Services: configuration, profile, track catalog and audio."""

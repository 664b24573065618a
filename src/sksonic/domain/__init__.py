"""Domain layer: catalog, playlist and playback."""

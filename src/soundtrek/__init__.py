"""SoundTrek API: crowdsourced noise-level map backend."""

"""Layout detection, extraction and record assembly."""

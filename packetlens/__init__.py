"""Protocol decoders that turn raw network frames into readable summaries."""

__version__ = "0.1.0"
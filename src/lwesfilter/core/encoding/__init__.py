"""Wire encoders and decoders for events."""

"""Receiver for the AWA LED frame protocol with RGBW calibration, segmented LED output and frame statistics."""

__version__ = "0.1.0"
__all__ = ["calibration", "framestate", "leds", "receiver", "ringbuffer", "statistics"]
"""Timing for decode/encode phases of a conversion."""

import time


class Timer:
    """Simple timer for decode/encode runtime."""
    
    def __init__(self):
        self.decode_time_ms = 0.0
        self.encode_time_ms = 0.0
    
    def measure_decode(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.decode_time_ms = (time.perf_counter() - start) * 1000.0
        return result
    
    def measure_encode(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.encode_time_ms = (time.perf_counter() - start) * 1000.0
        return result

    @property
    def total_ms(self) -> float:
        return self.decode_time_ms + self.encode_time_ms

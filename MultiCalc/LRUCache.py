# LRUCache.py
from collections import OrderedDict


class LRUCache:
    """Bounded key -> value store, least recently used entry evicted first."""

    def __init__(self, capacity=100):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._data = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key, default=None):
        if key not in self._data:
            self.misses += 1
            return default
        self._data.move_to_end(key)
        self.hits += 1
        return self._data[key]

    def set(self, key, value):
        if key in self._data:
            self._data.move_to_end(key)
        self._data[key] = value
        if len(self._data) > self.capacity:
            self._data.popitem(last=False)

    def clear(self):
        self._data.clear()
        self.hits = 0
        self.misses = 0

    def stats(self):
        return {"size": len(self._data), "capacity": self.capacity,
                "hits": self.hits, "misses": self.misses}

    def __contains__(self, key):
        return key in self._data

    def __len__(self):
        return len(self._data)

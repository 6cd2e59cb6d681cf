from . import qr_creation, slug_allocator, storage

__all__ = [
    "qr_creation",
    "slug_allocator",
    "storage",
]

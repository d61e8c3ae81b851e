from gigs.stores.django_store import DjangoGigStore
from gigs.stores.interfaces import GigStore

__all__ = ["DjangoGigStore", "GigStore"]

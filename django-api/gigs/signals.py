"""Django signals for cache invalidation."""

import logging

from django.core.cache import cache
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from gigs.cache_keys import city_fans_key
from gigs.models import BandCityFans

logger = logging.getLogger(__name__)


@receiver([post_save, post_delete], sender=BandCityFans)
def invalidate_city_fans_cache(sender, instance, **kwargs):
    """Invalidate a band's city-fans listing once the ledger change commits."""
    key = city_fans_key(instance.band_id)
    transaction.on_commit(lambda: cache.delete(key))
    logger.debug("Queued city fans cache invalidation for band %s", instance.band_id)

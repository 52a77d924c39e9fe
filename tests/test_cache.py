from datetime import timedelta
from types import SimpleNamespace

from django.utils import timezone

from catalog import cache


class TestTaggedCache:
    def test_invalidate_tag_deletes_registered_keys(self):
        cache.set_tagged('a', 'A', tags=['product', 'product-1'])
        cache.set_tagged('b', 'B', tags=['product', 'product-2'])

        cache.invalidate_tags('product-1')

        assert cache.get('a') is None
        assert cache.get('b') == 'B'

    def test_shared_tag_deletes_all_keys(self):
        cache.set_tagged('a', 'A', tags=['product'])
        cache.set_tagged('b', 'B', tags=['product'])

        cache.invalidate_tags('product')

        assert cache.get('a') is None
        assert cache.get('b') is None

    def test_unknown_tag_is_ignored(self):
        cache.set_tagged('a', 'A', tags=['product-1'])

        cache.invalidate_tags('product-99')

        assert cache.get('a') == 'A'

    def test_expired_value_is_not_stored(self):
        cache.set_tagged('a', 'A', expire=timezone.now() - timedelta(minutes=1), tags=['product'])

        assert cache.get('a') is None

    def test_future_expiry_is_stored(self):
        cache.set_tagged('a', 'A', expire=timezone.now() + timedelta(hours=1))

        assert cache.get('a') == 'A'


class TestAddMetaItems:
    def test_tags_for_each_product(self):
        items = [SimpleNamespace(pk=1, end_date=None), SimpleNamespace(pk=2, end_date=None)]

        expire, tags = cache.add_meta_items(items)

        assert expire is None
        assert tags == ['product', 'product-1', 'product-2']

    def test_earliest_future_end_date_wins(self):
        now = timezone.now()
        soon = now + timedelta(days=1)
        later = now + timedelta(days=5)
        items = [
            SimpleNamespace(pk=1, end_date=later),
            SimpleNamespace(pk=2, end_date=soon),
            SimpleNamespace(pk=3, end_date=now - timedelta(days=1)),
        ]

        expire, _ = cache.add_meta_items(items)

        assert expire == soon

    def test_keeps_earlier_expiry_and_existing_tags(self):
        soon = timezone.now() + timedelta(hours=1)
        item = SimpleNamespace(pk=3, end_date=soon + timedelta(days=1))

        expire, tags = cache.add_meta_items(item, expire=soon, tags=['catalog'])

        assert expire == soon
        assert tags == ['catalog', 'product', 'product-3']

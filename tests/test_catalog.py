import unittest
from unittest.mock import MagicMock

from coinlist import Asset, CoinCatalog, FormatFailure, LoadFailure, MarketDataRepository

COINS = [
    {"id": "bitcoin", "symbol": "btc", "name": "Bitcoin"},
    {"id": "ethereum", "symbol": "eth", "name": "Ethereum"},
    {"id": "wrapped-bitcoin", "symbol": "wbtc", "name": "Wrapped Bitcoin"},
    {"id": "tether", "symbol": "usdt", "name": "Tether"},
    {"id": "bitcoin-cash", "symbol": "bch", "name": "Bitcoin Cash"},
]


def _catalog(records=COINS) -> CoinCatalog:
    return CoinCatalog.from_json(records)


class TestCoinCatalogFilter(unittest.TestCase):
    def test_prefix_query_matches_symbol(self):
        catalog = _catalog(
            [
                {"id": "btc", "symbol": "btc", "name": "Bitcoin"},
                {"id": "eth", "symbol": "eth", "name": "Ethereum"},
            ]
        )

        self.assertEqual(catalog.filter("bt"), (Asset(id="btc", symbol="btc", name="Bitcoin"),))

    def test_empty_query_returns_whole_catalog(self):
        catalog = _catalog()

        result = catalog.filter("")

        self.assertIs(result, catalog.assets)
        self.assertEqual([a.id for a in result], [c["id"] for c in COINS])

    def test_match_is_case_sensitive(self):
        catalog = _catalog()

        self.assertEqual(catalog.filter("BTC"), ())
        self.assertEqual(
            [a.id for a in catalog.filter("Bitcoin")],
            ["bitcoin", "wrapped-bitcoin", "bitcoin-cash"],
        )

    def test_match_on_any_field(self):
        catalog = _catalog()

        self.assertEqual([a.id for a in catalog.filter("usdt")], ["tether"])
        self.assertEqual([a.id for a in catalog.filter("Teth")], ["tether"])
        self.assertEqual([a.id for a in catalog.filter("-cash")], ["bitcoin-cash"])

    def test_filtered_result_is_ordered_subsequence(self):
        catalog = _catalog()
        order = {asset.id: idx for idx, asset in enumerate(catalog)}

        for query in ("b", "c", "th", "in", "e", "zzz", "Bit", "t"):
            result = catalog.filter(query)
            positions = [order[asset.id] for asset in result]
            self.assertEqual(positions, sorted(positions), query)
            self.assertLessEqual(len(result), len(catalog))
            for asset in result:
                self.assertTrue(
                    query in asset.symbol or query in asset.name or query in asset.id,
                    (query, asset),
                )

    def test_filter_returns_tuple_for_every_query(self):
        catalog = _catalog()

        for query in ("", "eth", "zzz"):
            self.assertIsInstance(catalog.filter(query), tuple, query)

    def test_filter_does_not_mutate_catalog(self):
        catalog = _catalog()
        before = catalog.assets

        catalog.filter("eth")

        self.assertEqual(catalog.assets, before)
        self.assertEqual(len(catalog), len(COINS))

    def test_to_frame_keeps_order_and_columns(self):
        catalog = _catalog()

        df = CoinCatalog.to_frame(catalog.filter("Bitcoin"))

        self.assertEqual(list(df.columns), ["Symbol", "Name", "Id"])
        self.assertEqual(df["Symbol"].tolist(), ["btc", "wbtc", "bch"])

    def test_to_frame_of_no_matches_is_empty(self):
        df = CoinCatalog.to_frame([])

        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), ["Symbol", "Name", "Id"])


class TestCoinCatalogLoad(unittest.TestCase):
    def test_load_uses_repository_payload_in_order(self):
        repository = MagicMock()
        repository.fetch_coin_list.return_value = COINS

        catalog = CoinCatalog.load(repository)

        repository.fetch_coin_list.assert_called_once_with()
        self.assertEqual([a.symbol for a in catalog], ["btc", "eth", "wbtc", "usdt", "bch"])

    def test_empty_list_is_format_failure(self):
        repository = MagicMock()
        repository.fetch_coin_list.return_value = []

        with self.assertRaises(FormatFailure):
            CoinCatalog.load(repository)

    def test_non_list_payload_is_format_failure(self):
        with self.assertRaises(FormatFailure):
            CoinCatalog.from_json({"error": "rate limited"})

    def test_record_missing_field_is_format_failure(self):
        with self.assertRaises(FormatFailure):
            CoinCatalog.from_json([{"id": "bitcoin", "symbol": "btc"}])

    def test_record_with_non_string_field_is_format_failure(self):
        with self.assertRaises(FormatFailure):
            CoinCatalog.from_json([{"id": 1, "symbol": "btc", "name": "Bitcoin"}])

    def test_record_with_empty_id_is_format_failure(self):
        with self.assertRaises(FormatFailure):
            CoinCatalog.from_json(
                [
                    {"id": "bitcoin", "symbol": "btc", "name": "Bitcoin"},
                    {"id": "", "symbol": "x", "name": "X"},
                ]
            )

    def test_catalog_cannot_be_built_empty(self):
        with self.assertRaises(FormatFailure):
            CoinCatalog([])

    def test_not_found_status_is_load_failure(self):
        session = MagicMock()
        response = MagicMock()
        response.status_code = 404
        session.get.return_value = response
        repository = MarketDataRepository(base_url="https://example.test", session=session)

        with self.assertRaises(LoadFailure) as ctx:
            CoinCatalog.load(repository)

        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.url, "https://example.test/coins/list")
        response.json.assert_not_called()


if __name__ == "__main__":
    unittest.main()

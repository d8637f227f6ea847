"""补全与汇总单元测试"""

from __future__ import annotations

from componentize.core.catalog import assemble_catalog, complete_buckets
from componentize.core.models import (
    AssetLayout,
    AssetType,
    RegistryInfo,
    make_record,
    new_buckets,
)

LAYOUT = AssetLayout(
    host_url="http://localhost:9000",
    paths={AssetType.SCRIPT: "/scripts/vendor", AssetType.STYLE: "/styles/vendor"},
)


class TestCompleteBuckets:
    def test_fulfills_typed_records(self) -> None:
        buckets = new_buckets()
        rec = make_record("foo", AssetType.SCRIPT)
        rec.registry_info = RegistryInfo(main="dist/foo.js", version="1.0.0")
        buckets[AssetType.SCRIPT].append(rec)
        buckets[AssetType.STYLE].append(
            make_record("bar", AssetType.STYLE, version="2.0.0", filename="bar.css"),
        )

        complete_buckets(buckets, LAYOUT)

        assert rec.src == "http://localhost:9000/scripts/vendor/foo.js"
        assert rec.version == "1.0.0"
        bar = buckets[AssetType.STYLE][0]
        assert bar.src == "http://localhost:9000/styles/vendor/bar.css"
        assert bar.is_valid()

    def test_unknown_exempt(self) -> None:
        buckets = new_buckets()
        rec = make_record("img")
        rec.registry_info = RegistryInfo(main="logo.png", version="1.0.0")
        buckets[AssetType.UNKNOWN].append(rec)

        complete_buckets(buckets, LAYOUT)

        assert rec.src == "" and rec.version == "" and rec.filename is None

    def test_valid_records_untouched(self) -> None:
        buckets = new_buckets()
        rec = make_record("foo", AssetType.SCRIPT, version="1.0.0", src="http://x/foo.js")
        buckets[AssetType.SCRIPT].append(rec)
        complete_buckets(buckets, LAYOUT)
        assert rec.src == "http://x/foo.js"

    def test_incomplete_stub_survives(self, caplog) -> None:
        buckets = new_buckets()
        buckets[AssetType.SCRIPT].append(make_record("bare", AssetType.SCRIPT))
        complete_buckets(buckets, LAYOUT)
        assert not buckets[AssetType.SCRIPT][0].is_valid()
        assert "仍不完整: bare" in caplog.text


class TestAssembleCatalog:
    def test_shape_and_order(self) -> None:
        buckets = new_buckets()
        buckets[AssetType.SCRIPT] += [make_record("a"), make_record("b")]
        buckets[AssetType.STYLE].append(make_record("c"))
        buckets[AssetType.UNKNOWN].append(make_record("d"))

        catalog = assemble_catalog("my-app", buckets)

        assert catalog.name == "my-app"
        assert [r.name for r in catalog.js] == ["a", "b"]
        assert [r.name for r in catalog.css] == ["c"]
        assert [r.name for r in catalog.unknown] == ["d"]
        assert catalog.unresolved == 1

from __future__ import annotations

from pathlib import Path

import pytest

from iGallery.appctx import AppContext
from iGallery.cache.keys import ContentHashWitness, KeyDeriver
from iGallery.infrastructure.services.thumbnail_service import STATS_NAME


@pytest.fixture()
def appctx(tmp_path: Path):
    ctx = AppContext.for_data_dir(tmp_path / "data")
    yield ctx
    ctx.shutdown()


def test_settings_drive_cache_location(tmp_path, appctx):
    assert appctx.thumbnails.store.cache_dir == (tmp_path / "data" / "thumbnails").absolute()


def test_thumbnail_round_trip_updates_stats(tmp_path, make_image, appctx):
    src = str(make_image(tmp_path / "a.png", size=(100, 100)))
    first = appctx.get_or_create_thumbnail(src, 50)
    second = appctx.get_or_create_thumbnail(src, 50)
    assert first.thumbnail_path == second.thumbnail_path
    stats = appctx.stats.get(STATS_NAME)
    assert (stats.hits, stats.misses, stats.generated) == (1, 1, 1)


def test_request_thumbnail(tmp_path, make_image, appctx):
    src = str(make_image(tmp_path / "a.png"))
    assert appctx.request_thumbnail(src, 32).result(timeout=10).is_file()


def test_invalidate_and_sweep(tmp_path, make_image, appctx):
    album = tmp_path / "album"
    src = str(make_image(album / "a.png"))
    appctx.get_or_create_thumbnail(src, 256)
    appctx.get_or_create_thumbnail(src, 100)

    response = appctx.invalidate_collection(str(album))
    assert response.removed_count == 1

    report = appctx.sweep_orphans([str(album)])
    assert report.removed_count == 1


def test_witness_from_settings(tmp_path):
    data = tmp_path / "data"
    data.mkdir()
    (data / "settings.json").write_text('{"thumbnails": {"witness": "content"}}', encoding="utf-8")
    ctx = AppContext.for_data_dir(data)
    try:
        assert isinstance(ctx.container.resolve(KeyDeriver).witness, ContentHashWitness)
    finally:
        ctx.shutdown()


def test_witness_setting_applies_without_restart(tmp_path, make_image, appctx):
    src = str(make_image(tmp_path / "a.png"))
    before = appctx.get_or_create_thumbnail(src, 256).thumbnail_path

    response = appctx.update_setting("thumbnails.witness", "content")

    assert response.success
    assert response.value == "content"
    assert isinstance(appctx.container.resolve(KeyDeriver).witness, ContentHashWitness)
    after = appctx.get_or_create_thumbnail(src, 256).thumbnail_path
    assert after != before

    report = appctx.sweep_orphans([str(tmp_path)])
    assert report.success
    assert report.removed_keys == [Path(before).stem]


def test_update_setting_rejects_invalid_value(appctx):
    response = appctx.update_setting("thumbnails.witness", "sha1")
    assert not response.success
    assert response.error_kind == "invalid_input"
    assert appctx.settings.get("thumbnails.witness") == "mtime"


def test_sweep_missing_directory_reported(tmp_path, appctx):
    response = appctx.sweep_orphans([str(tmp_path / "missing")])
    assert not response.success
    assert response.error_kind == "invalid_input"
    assert response.removed_keys == []

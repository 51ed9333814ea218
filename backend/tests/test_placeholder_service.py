import pytest

from services import font_selector
from services import placeholder_service as ps
from services.cache_store import CacheStore
from services.image_renderer import RenderError
from settings import Settings


class _CountingLoader:
    def __init__(self, failing=()):
        self.calls = []
        self.failing = set(failing)

    def __call__(self, key):
        self.calls.append(key)
        if key in self.failing:
            raise OSError(f"cannot load {key}")
        return font_selector.load_font(key)


def _service(loader=None, **overrides):
    settings = Settings(**overrides)
    return ps.PlaceholderService(settings, CacheStore(settings.MAX_CACHE_SIZE), font_loader=loader)


def test_build_request_defaults():
    service = _service(DEFAULT_TEXT_WRAP=False, DEFAULT_TEXT_WRAP_WIDTH=80)
    request, failure = service.build_request("800x600", "ffffff", "000000")

    assert failure is None
    assert request.text == "800x600"
    assert request.font_size is None
    assert request.text_wrap is False
    assert request.text_wrap_width == 80


def test_build_request_parses_query_values():
    service = _service()
    request, failure = service.build_request(
        "300x200", "ffffff", "000000", text="hi there", font_size="32", text_wrap="true", text_wrap_width="70"
    )

    assert failure is None
    assert request.text == "hi there"
    assert request.font_size == 32
    assert request.text_wrap is True
    assert request.text_wrap_width == 70


def test_text_wrap_only_true_enables_wrapping():
    service = _service(DEFAULT_TEXT_WRAP=True)
    request, _ = service.build_request("300x200", "ffffff", "000000", text_wrap="yes")
    assert request.text_wrap is False


def test_build_request_reports_failure():
    request, failure = _service(MAX_FONT_SIZE=128).build_request("800x600", "ffffff", "000000", font_size="200")
    assert request is None
    assert "between 8 and 128" in failure.message


def test_second_identical_request_hits_cache(monkeypatch):
    loader = _CountingLoader()
    service = _service(loader=loader)
    render_calls = {"count": 0}
    real_render = ps.render_image

    def counting_render(*args, **kwargs):
        render_calls["count"] += 1
        return real_render(*args, **kwargs)

    monkeypatch.setattr(ps, "render_image", counting_render)
    request, _ = service.build_request("120x80", "eeeeee", "333333", text="cached")

    first, hit1 = service.generate(request)
    second, hit2 = service.generate(request)

    assert (hit1, hit2) == (False, True)
    assert first.data == second.data
    assert first.etag == second.etag
    assert render_calls["count"] == 1
    assert loader.calls == ["sans-8"]


def test_image_cache_evicts_oldest():
    service = _service(MAX_CACHE_SIZE=2)
    keys = []
    for text in ("one", "two", "three"):
        request, _ = service.build_request("40x40", "ffffff", "000000", text=text)
        service.generate(request)
        keys.append(service.cache_key_for(request))

    assert service.caches.image_cache.keys() == keys[1:]


def test_etag_disabled():
    service = _service(ETAG_ENABLED=False)
    request, _ = service.build_request("40x40", "ffffff", "000000")
    entry, _ = service.generate(request)
    assert entry.etag is None


def test_missing_fonts_raise_render_error():
    loader = _CountingLoader(failing={"sans-8", font_selector.FALLBACK_FONT_KEY})
    service = _service(loader=loader)
    request, _ = service.build_request("50x50", "ffffff", "000000")

    with pytest.raises(RenderError):
        service.generate(request)
    assert len(service.caches.image_cache) == 0


def test_wrapped_lines_fit_configured_width():
    service = _service()
    text = "placeholder images are generated on demand with wrapped centred text"
    request, _ = service.build_request(
        "400x300", "ffffff", "000000", text=text, font_size="32", text_wrap="true", text_wrap_width="70"
    )
    font = font_selector.select_font(400, 300, 32, service.settings, service.caches.font_cache, service.font_loader)
    layout = ps.layout_text(request.text, font, 400, 300, True, 70)

    assert len(layout.lines) > 1
    max_width = (400 * 70) // 100
    for line in layout.lines:
        assert font.measure(line.text) <= max_width or " " not in line.text
    assert " ".join(layout.texts) == text


def test_output_options_follow_settings():
    service = _service(IMAGE_FORMAT="jpeg", IMAGE_QUALITY=55)
    assert service.options.image_format.value == "jpeg"
    assert service.options.quality == 55

    assert _service(IMAGE_FORMAT="gif").options.image_format.value == "png"

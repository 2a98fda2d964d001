from chronochroma.conversions.resolver import CSSColorResolver, OPAQUE_BLACK


def test_named_color():
    resolved = CSSColorResolver().resolve("red")
    assert resolved == (255, 0, 0, 1, False)
    assert resolved.rgb == (255, 0, 0)


def test_named_color_case_insensitive():
    assert CSSColorResolver().resolve("CornflowerBlue").rgb == (100, 149, 237)


def test_transparent():
    assert CSSColorResolver().resolve("transparent") == (0, 0, 0, 0, True)


def test_unresolvable_is_black():
    assert CSSColorResolver().resolve("not-a-color") == OPAQUE_BLACK
    assert CSSColorResolver().resolve(None) == OPAQUE_BLACK


def test_rgb_is_clamped():
    resolved = CSSColorResolver().resolve("rgba(300, 0, 0, 0.5)")
    assert resolved.rgb == (255, 0, 0)
    assert resolved.alpha == 0.5
    assert resolved.alpha_mode is True


def test_hsl():
    assert CSSColorResolver().resolve("hsl(120, 100%, 25%)").rgb == (0, 128, 0)


def test_transparent_pixel_drops_color():
    assert CSSColorResolver().resolve("rgba(255, 255, 255, 0)") == (0, 0, 0, 0, True)


def test_hex_alpha_support_probe():
    assert CSSColorResolver().resolve("#00000000").alpha == 0
    assert CSSColorResolver(hex_alpha_supported=False).resolve("#00000000").alpha == 1


def test_short_hex_alpha():
    resolved = CSSColorResolver().resolve("#f008")
    assert resolved.rgb == (255, 0, 0)
    assert resolved.alpha == 0.53

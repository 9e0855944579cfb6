from owotnes.utils.colors import bgr_to_rgb


class TestColors:

    def test_bgr_to_rgb_swaps_outer_channels(self):
        assert bgr_to_rgb(0x0000FF) == 0xFF0000
        assert bgr_to_rgb(0x123456) == 0x563412
        assert bgr_to_rgb(bgr_to_rgb(0xABCDEF)) == 0xABCDEF

    def test_green_and_grays_unchanged(self):
        for pixel in (0x00FF00, 0x000000, 0xFFFFFF, 0x7F7F7F):
            assert bgr_to_rgb(pixel) == pixel

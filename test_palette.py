import unittest

import palette
from palette import CATEGORY_NAMES, CATEGORY_PALETTE, XTERM_PALETTE, hex_to_rgb, resolve


class TestPalette(unittest.TestCase):

    def test_table_sizes(self):
        self.assertEqual(len(XTERM_PALETTE), 256)
        self.assertEqual(len(CATEGORY_NAMES), 22)
        self.assertEqual(sorted(CATEGORY_PALETTE), list(range(22)))

    def test_xterm_landmarks(self):
        self.assertEqual(XTERM_PALETTE[0], "000000")
        self.assertEqual(XTERM_PALETTE[15], "ffffff")
        self.assertEqual(XTERM_PALETTE[16], "000000")
        self.assertEqual(XTERM_PALETTE[231], "ffffff")
        self.assertEqual(XTERM_PALETTE[232], "080808")
        self.assertEqual(XTERM_PALETTE[255], "eeeeee")

    def test_hex_to_rgb(self):
        self.assertEqual(hex_to_rgb("d75f87"), (0xd7, 0x5f, 0x87, 255))

    def test_every_category_resolves_to_its_palette_entry(self):
        for category in range(22):
            hex_string = XTERM_PALETTE[CATEGORY_PALETTE[category]]
            expected = (
                int(hex_string[0:2], 16),
                int(hex_string[2:4], 16),
                int(hex_string[4:6], 16),
                255,
            )
            self.assertEqual(resolve(category), expected, CATEGORY_NAMES[category])

    def test_known_colors(self):
        self.assertEqual(resolve(palette.KEYWORD), (0xd7, 0x5f, 0xd7, 255))
        self.assertEqual(resolve(palette.STRING), (0x87, 0xd7, 0x87, 255))
        self.assertEqual(resolve(palette.COMMENT), (0x87, 0x87, 0x87, 255))

    def test_embedded_category_is_mapped(self):
        self.assertIsNotNone(resolve(palette.EMBEDDED))

    def test_unmapped_category_is_reported_not_raised(self):
        for category in (22, 99, -1):
            with self.assertLogs("palette", level="WARNING") as logs:
                self.assertIsNone(resolve(category))
            self.assertIn("No color mapped", logs.output[0])


if __name__ == "__main__":
    unittest.main()

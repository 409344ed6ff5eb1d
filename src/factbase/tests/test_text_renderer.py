import unittest

from factbase.mappers.text import RULE, TextRenderer
from factbase.store.indexed import IndexedFactStore


class TestTextRenderer(unittest.TestCase):
    def setUp(self) -> None:
        self.store = IndexedFactStore(["name", "is-male", "type"])
        self.store.assert_fact(("Boris", True, "cat"))
        self.store.assert_fact(("Felix", True, "cat"))
        self.store.assert_fact(("Kitty", False, "guinea pig"))

    def test_render_store_skips_retracted(self) -> None:
        self.store.retract_fact(("Felix", True, "cat"))
        expected = "\n".join(
            [
                "FactBase: ( <name> <is-male> <type> )",
                RULE,
                "0: ( Boris True cat )",
                "2: ( Kitty False guinea pig )",
            ]
        )
        self.assertEqual(TextRenderer().render_store(self.store), expected)
        self.assertEqual(str(self.store), expected)

    def test_render_index(self) -> None:
        text = TextRenderer().render_index(self.store, 2)
        self.assertEqual(text, "Field 2 <type>\ncat | ( 0 1 )\nguinea pig | ( 2 )")
        with self.assertRaises(IndexError):
            TextRenderer().render_index(self.store, 3)

    def test_render_container_values(self) -> None:
        renderer = TextRenderer()
        self.assertEqual(renderer.render_fact((0, [2, 3], [])), "( 0 [ 2 3 ] [ ] )")


if __name__ == "__main__":
    unittest.main()

import unittest

from lamb.lang.environment import Environment


class EnvironmentTestCase(unittest.TestCase):

    def test_empty(self):
        env = Environment.empty()
        self.assertTrue(env.is_empty)
        self.assertNotIn("x", env.names())
        self.assertEqual([], env.names())
        self.assertRaises(KeyError, env.lookup, "x")

    def test_extend_is_persistent(self):
        empty = Environment.empty()
        one = empty.extend("x", 1)
        two = one.extend("y", 2)

        self.assertRaises(KeyError, empty.lookup, "x")
        self.assertRaises(KeyError, one.lookup, "y")
        self.assertEqual(1, two.lookup("x"))
        self.assertEqual(2, two.lookup("y"))

    def test_shadowing(self):
        outer = Environment.empty().extend("x", 1)
        inner = outer.extend("x", 2)

        self.assertEqual(2, inner.lookup("x"))
        self.assertEqual(1, outer.lookup("x"))
        self.assertEqual(["x"], inner.names())
        self.assertEqual(["x"], outer.names())

    def test_siblings(self):
        parent = Environment.empty().extend("n", 1)
        left = parent.extend("a", "left")
        right = parent.extend("a", "right")

        self.assertEqual("left", left.lookup("a"))
        self.assertEqual("right", right.lookup("a"))
        self.assertEqual(["a", "n"], right.names())

    def test_falsy_values(self):
        env = Environment.empty().extend("zero", 0).extend("nothing", "").extend("no", False)
        cases = {"zero": 0, "nothing": "", "no": False}
        for case, expected in cases.items():
            self.assertIn(case, env.names())
            self.assertEqual(expected, env.lookup(case), case)


if __name__ == '__main__':
    unittest.main()

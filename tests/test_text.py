import unittest

from bytevec._bytevector import ByteVector
from bytevec._format import format_append
from bytevec._text import CharView, WideCharView, _TextView


class TestTextViews(unittest.TestCase):
    """Unit tests for the narrow and wide string views."""

    def _run_test_for_text_types(self, test_func):
        """Helper to run a test for narrow and wide strings over both allocation types."""
        for view_type, convert in ((CharView, str.encode), (WideCharView, str)):
            for use_numpy in (False, True):
                with self.subTest(view=view_type.__name__, use_numpy=use_numpy):
                    test_func(view_type, convert, use_numpy)

    def test_getstr_of_terminated_bytes(self):
        """A terminated byte sequence reads back as the sequence itself."""
        for payload in (b"", b"a", b"hello world", bytes(range(1, 256))):
            with self.subTest(payload=payload[:8]):
                view = CharView(ByteVector(payload + b"\0"))
                self.assertEqual(view.getstr(), payload)
                self.assertEqual(len(view), len(payload) + 1)

    def test_getstr_adds_one_terminator(self):
        """Repeated getstr calls add at most one terminator."""

        def _test(view_type, s, use_numpy):
            view = view_type(ByteVector(use_numpy=use_numpy))
            self.assertEqual(view.getstr(), s(""))
            self.assertEqual(len(view), 1)

            view = view_type(ByteVector(use_numpy=use_numpy))
            view.strcat(s(""))
            view.getstr()
            length = len(view)
            view.getstr()
            self.assertEqual(len(view), length)

            view = view_type(ByteVector(use_numpy=use_numpy))
            view.pushback(ord("a"))
            self.assertEqual(view.getstr(), s("a"))
            self.assertEqual(len(view), 2)

        self._run_test_for_text_types(_test)

    def test_from_string(self):
        """The string constructor stores the text and one terminator."""

        def _test(view_type, s, use_numpy):
            view = view_type.from_string(s("helloworld"), use_numpy=use_numpy)
            self.assertEqual(len(view), 10 + 1)
            self.assertEqual(view.getstr(), s("helloworld"))
            self.assertEqual(len(view), 10 + 1)
            self.assertEqual(view.vector.use_numpy, use_numpy)

        self._run_test_for_text_types(_test)

    def test_strcat_sequence(self):
        """Concatenation replaces the trailing terminator."""

        def _test(view_type, s, use_numpy):
            vec = ByteVector(use_numpy=use_numpy)
            view = view_type(vec)
            view.strcat(s("a"))
            view.strcat(s("bb"))
            format_append(vec, s("%c%s%d"), s("c"), s("cc"), 12345)
            view.strcat(s("ddd"))
            view.pushback(s("d"))
            view.strcat(s("eeeee"))
            self.assertEqual(len(view), 16 + 5)
            self.assertEqual(view.getstr(), s("abbccc12345ddddeeeee"))

        self._run_test_for_text_types(_test)

    def test_strcat_stops_at_embedded_terminator(self):
        """Only the text before an embedded terminator is appended."""
        view = CharView()
        view.strcat(b"ab\0cd")
        self.assertEqual(view.getstr(), b"ab")
        self.assertEqual(len(view), 3)

    def test_strncat(self):
        """Bounded concatenation copies at most n characters and one terminator."""

        def _test(view_type, s, use_numpy):
            view = view_type(ByteVector(use_numpy=use_numpy))
            view.strncat(s("abcde"), 2)
            self.assertEqual(view.getstr(), s("ab"))

            view = view_type(ByteVector(use_numpy=use_numpy))
            view.strncat(s("xxx"), 0)
            view.strncat(s("abcde"), 1)
            view.strncat(s(""), 0)
            view.strncat(s("abcde"), 2)
            view.strncat(s("abcde"), 5)
            view.strncat(s(""), 100)
            view.strncat(s("1"), 100)
            view.strncat(s("12"), 100)
            self.assertEqual(len(view), 11 + 1)
            self.assertEqual(view.getstr(), s("aababcde112"))

        self._run_test_for_text_types(_test)

    def test_strshrink(self):
        """Writing an early terminator and shrinking reclaims the tail and capacity."""

        def _test(view_type, s, use_numpy):
            view = view_type.from_string(s("abbccc12345ddddeeeee"), use_numpy=use_numpy)
            view.resize(7)
            self.assertEqual(len(view), 7)
            self.assertEqual(view.getstr(), s("abbccc1"))

            view[3] = 0
            view.strshrink()
            self.assertEqual(len(view), 4)
            self.assertEqual(view.getstr(), s("abb"))
            self.assertLess(view.vector.capacity, 2 * view.vector.size)

        self._run_test_for_text_types(_test)

    def test_copy_move_swap_of_strings(self):
        """Narrow and wide strings survive copy, move and swap."""
        narrow = CharView.from_string(b"abbccc12345ddddeeeee")
        wide = WideCharView.from_string("abbccc12345ddddeeeee")

        narrow_copy = ByteVector()
        narrow_copy.copy_from(narrow.vector)
        wide_copy = ByteVector.from_vector(wide.vector)

        moved = ByteVector()
        moved.move_from(narrow_copy)
        self.assertTrue(narrow_copy.empty)
        self.assertEqual(CharView(moved).getstr(), b"abbccc12345ddddeeeee")

        wide_copy.swap(moved)
        self.assertEqual(CharView(wide_copy).getstr(), b"abbccc12345ddddeeeee")
        self.assertEqual(len(CharView(wide_copy)), 16 + 5)
        self.assertEqual(WideCharView(moved).getstr(), "abbccc12345ddddeeeee")
        self.assertEqual(len(WideCharView(moved)), 16 + 5)

    def test_wide_surrogate_pairs(self):
        """Characters outside the basic plane take two code units."""
        view = WideCharView()
        view.strcat("a\U0001f600")
        self.assertEqual(len(view), 4)
        self.assertEqual(view.getstr(), "a\U0001f600")
        self.assertEqual(bytes(view.vector), "a\U0001f600\0".encode("utf-16-le"))

    def test_detach(self):
        """detach returns the string and frees the vector."""
        view = WideCharView()
        view.strcat("text")
        self.assertEqual(view.detach(), "text")
        self.assertEqual(view.vector.capacity, 0)

    def test_base_view_is_abstract(self):
        """The shared base of the string views cannot be instantiated."""
        with self.assertRaises(TypeError):
            _TextView()

    def test_wide_pushback_code_units(self):
        """Integer characters must be code units; astral strings become surrogate pairs."""
        view = WideCharView()
        view.pushback(0xD83D)
        self.assertEqual(len(view), 2)
        with self.assertRaisesRegex(ValueError, "char must be a UTF-16 code unit."):
            view.pushback(0x1F600)
        self.assertEqual(len(view), 2)

        view = WideCharView()
        view.pushback("\U0001f600")
        self.assertEqual(len(view), 3)
        self.assertEqual(view.getstr(), "\U0001f600")

    def test_type_checks(self):
        """Narrow views take bytes, wide views take str."""
        with self.assertRaisesRegex(TypeError, "narrow strings must be bytes, not str."):
            CharView().strcat("abc")  # type: ignore
        with self.assertRaisesRegex(TypeError, "wide strings must be str."):
            WideCharView().strcat(b"abc")  # type: ignore


if __name__ == "__main__":
    unittest.main()

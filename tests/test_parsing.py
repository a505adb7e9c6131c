import unittest

from trackerexpr.errors import ErrorKind, ExprError
from trackerexpr.parsing import Binary, Call, Identifier, Literal, Unary, parse_expression


class TestParseExpression(unittest.TestCase):
    def test_literals_and_identifiers(self) -> None:
        self.assertEqual(parse_expression("42"), Literal(42))
        self.assertEqual(parse_expression(" 1.5 "), Literal(1.5))
        self.assertEqual(parse_expression("true"), Literal(True))
        self.assertEqual(parse_expression("max"), Identifier("max"))

    def test_operator_precedence(self) -> None:
        self.assertEqual(
            parse_expression("1 + 2 * 3"),
            Binary("+", Literal(1), Binary("*", Literal(2), Literal(3))),
        )
        self.assertEqual(
            parse_expression("(1 + 2) % 3"),
            Binary("%", Binary("+", Literal(1), Literal(2)), Literal(3)),
        )

    def test_unary_operators(self) -> None:
        self.assertEqual(parse_expression("-dataset(0)"), Unary("-", Call("dataset", (Literal(0),))))
        self.assertEqual(parse_expression("+2"), Unary("+", Literal(2)))

    def test_nested_calls(self) -> None:
        self.assertEqual(
            parse_expression("max(setMissingValues(dataset(1), 0))"),
            Call(
                "max",
                (Call("setMissingValues", (Call("dataset", (Literal(1),)), Literal(0))),),
            ),
        )
        self.assertEqual(parse_expression("sum()"), Call("sum", ()))

    def test_syntax_errors(self) -> None:
        for text in ("", "1 +", "max(", "1 2"):
            result = parse_expression(text)
            self.assertIsInstance(result, ExprError, text)
            self.assertEqual(result.kind, ErrorKind.PARSE_ERROR)

    def test_rejects_constructs_outside_the_grammar(self) -> None:
        for text in ("2 ** 3", "7 // 2", "a.b", "[1, 2]", "1, 2", "max(x=1)", "(1)(2)", "a and b"):
            result = parse_expression(text)
            self.assertIsInstance(result, ExprError, text)
            self.assertEqual(result.kind, ErrorKind.PARSE_ERROR)


if __name__ == "__main__":
    unittest.main()

"""
Recursive descent parser for treelang.

Converts a token stream into a list of statements (the program AST).
"""

from typing import List, Optional
from .tokens import Token, TokenType, SourceSpan
from .lexer import tokenize
from .ast import (
    BinaryOperator,
    # Expressions
    Expression, NumberLiteral, BooleanLiteral, Variable, BinaryOp,
    FunctionLiteral, Call,
    # Statements
    Statement, Let, Assignment, If, While, Print, ExpressionStatement, Return,
    Program,
)
from .errors import (
    error_unexpected_token,
    error_unexpected_eof,
    error_not_an_expression,
)


class Parser:
    """
    Recursive descent parser for treelang.

    Usage:
        parser = Parser(tokens)
        program = parser.parse_program()

    The parser implements precedence climbing for expressions, all binary
    operators being left-associative:
        Lowest:  ||
                 &&
                 ===
                 < >
                 + -
        Highest: * /

    A '+' or '-' directly in front of a number literal, in operand position,
    is part of the literal. There is no general unary minus.
    """

    # Operator precedence levels (higher = tighter binding)
    PRECEDENCE = {
        TokenType.OR: 1,
        TokenType.AND: 2,
        TokenType.STRICT_EQ: 3,
        TokenType.LT: 4,
        TokenType.GT: 4,
        TokenType.PLUS: 5,
        TokenType.MINUS: 5,
        TokenType.STAR: 6,
        TokenType.SLASH: 6,
    }

    OPERATORS = {
        TokenType.OR: BinaryOperator.OR,
        TokenType.AND: BinaryOperator.AND,
        TokenType.STRICT_EQ: BinaryOperator.STRICT_EQUAL,
        TokenType.LT: BinaryOperator.LESS,
        TokenType.GT: BinaryOperator.GREATER,
        TokenType.PLUS: BinaryOperator.ADD,
        TokenType.MINUS: BinaryOperator.SUBTRACT,
        TokenType.STAR: BinaryOperator.MULTIPLY,
        TokenType.SLASH: BinaryOperator.DIVIDE,
    }

    def __init__(self, tokens: List[Token], filename: Optional[str] = None, source: Optional[str] = None):
        self.tokens = tokens
        self.filename = filename
        self.source = source  # Original source code for error messages
        self.pos = 0

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Token:
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    def _peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[idx]

    def _is_at_end(self) -> bool:
        return self._current().type == TokenType.EOF

    def _check(self, token_type: TokenType) -> bool:
        return self._current().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._current()
        if not self._is_at_end():
            self.pos += 1
        return token

    def _consume(self, token_type: TokenType, expected: str) -> Token:
        """Consume token of expected type, or raise error."""
        if self._check(token_type):
            return self._advance()
        self._error(expected)

    def _match(self, *token_types: TokenType) -> Optional[Token]:
        """Consume token if it matches any of the given types."""
        if self._current().type in token_types:
            return self._advance()
        return None

    def _error(self, expected: str) -> None:
        """Raise a parser error at the current token."""
        token = self._current()
        if token.type == TokenType.EOF:
            raise error_unexpected_eof(expected, token.span)
        raise error_unexpected_token(
            expected, f"'{token.lexeme}'", token.span,
            self._source_line(token.span.start.line),
        )

    def _source_line(self, line_num: int) -> Optional[str]:
        if self.source is None:
            return None
        lines = self.source.splitlines()
        if 1 <= line_num <= len(lines):
            return lines[line_num - 1]
        return None

    def _span_from(self, start: Token) -> SourceSpan:
        """Create a span from start token to the last consumed token."""
        prev_pos = max(0, self.pos - 1)
        end_token = self.tokens[prev_pos]
        return SourceSpan(start.span.start, end_token.span.end)

    # =========================================================================
    # Expression Parsing (Precedence Climbing)
    # =========================================================================

    def _parse_expression(self) -> Expression:
        return self._parse_binary_expr(0)

    def _parse_binary_expr(self, min_precedence: int) -> Expression:
        """Parse binary expressions with precedence climbing."""
        start = self._current()
        left = self._parse_primary_expr()

        while True:
            op_token = self._current()
            precedence = self.PRECEDENCE.get(op_token.type)

            if precedence is None or precedence < min_precedence:
                break

            self._advance()  # consume operator
            right = self._parse_binary_expr(precedence + 1)

            left = BinaryOp(
                operator=self.OPERATORS[op_token.type],
                left=left,
                right=right,
                span=self._span_from(start),
            )

        return left

    def _parse_primary_expr(self) -> Expression:
        """Parse primary expressions (literals, names, calls, functions, groups)."""
        token = self._current()

        if token.type == TokenType.NUMBER_LITERAL:
            self._advance()
            return NumberLiteral(value=token.value, span=token.span)

        # Signed number literal: -2, +2, -0, -Infinity
        if token.type in (TokenType.MINUS, TokenType.PLUS):
            if self._peek(1).type != TokenType.NUMBER_LITERAL:
                self._advance()
                self._error("number after sign")
            self._advance()  # consume sign
            number = self._advance()
            value = -number.value if token.type == TokenType.MINUS else number.value
            return NumberLiteral(value=value, span=self._span_from(token))

        if token.type == TokenType.BOOL_LITERAL:
            self._advance()
            return BooleanLiteral(value=token.value, span=token.span)

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            if self._check(TokenType.LPAREN):
                arguments = self._parse_arguments()
                return Call(callee=token.value, arguments=arguments, span=self._span_from(token))
            return Variable(name=token.value, span=token.span)

        if token.type == TokenType.FUNCTION:
            return self._parse_function_literal()

        if token.type == TokenType.LPAREN:
            self._advance()  # consume '('
            expr = self._parse_expression()
            self._consume(TokenType.RPAREN, "')'")
            return expr

        self._error("expression")

    def _parse_arguments(self) -> List[Expression]:
        """Parse a parenthesized, comma-separated argument list."""
        self._consume(TokenType.LPAREN, "'('")
        args = []
        if not self._check(TokenType.RPAREN):
            args.append(self._parse_expression())
            while self._match(TokenType.COMMA):
                args.append(self._parse_expression())
        self._consume(TokenType.RPAREN, "')'")
        return args

    def _parse_function_literal(self) -> FunctionLiteral:
        start = self._advance()  # consume 'function'
        self._consume(TokenType.LPAREN, "'('")
        parameters = []
        if not self._check(TokenType.RPAREN):
            parameters.append(self._consume(TokenType.IDENTIFIER, "parameter name").value)
            while self._match(TokenType.COMMA):
                parameters.append(self._consume(TokenType.IDENTIFIER, "parameter name").value)
        self._consume(TokenType.RPAREN, "')'")
        body = self._parse_block()
        return FunctionLiteral(parameters=parameters, body=body, span=self._span_from(start))

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_statement(self) -> Statement:
        """Parse a statement."""
        token = self._current()

        if token.type == TokenType.LET:
            return self._parse_let_statement()

        if token.type == TokenType.IF:
            return self._parse_if_statement()

        if token.type == TokenType.WHILE:
            return self._parse_while_statement()

        if token.type == TokenType.PRINT:
            return self._parse_print_statement()

        if token.type == TokenType.RETURN:
            return self._parse_return_statement()

        # name = value;
        if token.type == TokenType.IDENTIFIER and self._peek(1).type == TokenType.ASSIGN:
            return self._parse_assignment()

        expr = self._parse_expression()
        self._consume(TokenType.SEMICOLON, "';'")
        return ExpressionStatement(expression=expr, span=self._span_from(token))

    def _parse_let_statement(self) -> Let:
        start = self._advance()  # consume 'let'
        name = self._consume(TokenType.IDENTIFIER, "identifier").value
        self._consume(TokenType.ASSIGN, "'='")
        expression = self._parse_expression()
        self._consume(TokenType.SEMICOLON, "';'")
        return Let(name=name, expression=expression, span=self._span_from(start))

    def _parse_assignment(self) -> Assignment:
        start = self._advance()  # consume name
        self._consume(TokenType.ASSIGN, "'='")
        expression = self._parse_expression()
        self._consume(TokenType.SEMICOLON, "';'")
        return Assignment(name=start.value, expression=expression, span=self._span_from(start))

    def _parse_condition(self) -> Expression:
        """Parse a parenthesized test expression for if/while."""
        self._consume(TokenType.LPAREN, "'('")
        test = self._parse_expression()
        self._consume(TokenType.RPAREN, "')'")
        return test

    def _parse_if_statement(self) -> If:
        start = self._advance()  # consume 'if'
        test = self._parse_condition()
        true_part = self._parse_block()

        false_part = []
        if self._match(TokenType.ELSE):
            false_part = self._parse_block()

        return If(test=test, true_part=true_part, false_part=false_part,
                  span=self._span_from(start))

    def _parse_while_statement(self) -> While:
        start = self._advance()  # consume 'while'
        test = self._parse_condition()
        body = self._parse_block()
        return While(test=test, body=body, span=self._span_from(start))

    def _parse_print_statement(self) -> Print:
        start = self._advance()  # consume 'print'
        self._consume(TokenType.LPAREN, "'('")
        expression = self._parse_expression()
        self._consume(TokenType.RPAREN, "')'")
        self._consume(TokenType.SEMICOLON, "';'")
        return Print(expression=expression, span=self._span_from(start))

    def _parse_return_statement(self) -> Return:
        start = self._advance()  # consume 'return'
        expression = self._parse_expression()
        self._consume(TokenType.SEMICOLON, "';'")
        return Return(expression=expression, span=self._span_from(start))

    def _parse_block(self) -> List[Statement]:
        """Parse a brace-delimited block of statements."""
        self._consume(TokenType.LBRACE, "'{'")
        statements = []
        while not self._check(TokenType.RBRACE) and not self._is_at_end():
            statements.append(self._parse_statement())
        self._consume(TokenType.RBRACE, "'}'")
        return statements

    # =========================================================================
    # Entry Points
    # =========================================================================

    def parse_program(self) -> Program:
        """Parse a complete program."""
        statements = []
        while not self._is_at_end():
            statements.append(self._parse_statement())
        return statements

    def parse_expression(self) -> Expression:
        """Parse a single expression, optionally followed by ';', and nothing else."""
        expr = self._parse_expression()
        self._match(TokenType.SEMICOLON)
        if not self._is_at_end():
            raise error_not_an_expression(self._current().span)
        return expr


def parse(tokens: List[Token], filename: Optional[str] = None, source: Optional[str] = None) -> Program:
    """
    Convenience function to parse tokens into a program.

    Args:
        tokens: List of tokens from the lexer
        filename: Optional filename for error messages
        source: Optional original source code for error messages

    Returns:
        List of top-level statements

    Raises:
        ParserError: If parsing fails
    """
    parser = Parser(tokens, filename, source)
    return parser.parse_program()


def parse_program(source: str, filename: Optional[str] = None) -> Program:
    """Tokenize and parse program source text."""
    return parse(tokenize(source, filename), filename, source)


def parse_expression(source: str) -> Expression:
    """Tokenize and parse the source of a single expression."""
    parser = Parser(tokenize(source), source=source)
    return parser.parse_expression()

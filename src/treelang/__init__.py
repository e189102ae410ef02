"""
treelang: a tree-walking interpreter for a small imperative language.

This package provides:
- Lexer: Tokenizes treelang source code
- Parser: Builds the AST from tokens
- Serialization: JSON encoding of the AST for external parsers
- Runtime: Evaluates programs against a chain of scope frames

Usage:
    from treelang import parse_program, run, compile_and_run

    program = parse_program('''
        let x = 1;
        if (x < 2) {
            let y = 10;     // local to the branch
            x = x + y;
        }
        print(x);
    ''')
    state = run(program)        # {'x': Value(11.0, number)}

    # Or in one call, with errors reported instead of raised
    result = compile_and_run('let a = 1 / 0;')
    if not result.success:
        print(result.error_message)     # division by zero
"""

__version__ = "0.1.0"

from .tokens import (
    Token,
    TokenType,
    SourceLocation,
    SourceSpan,
    KEYWORDS,
    is_keyword,
)

from .lexer import (
    Lexer,
    tokenize,
)

from .parser import (
    Parser,
    parse,
    parse_program,
    parse_expression,
)

from .ast import (
    # Base
    AstNode,
    AstVisitor,
    BinaryOperator,
    # Expressions
    Expression,
    NumberLiteral,
    BooleanLiteral,
    Variable,
    BinaryOp,
    FunctionLiteral,
    Call,
    # Statements
    Statement,
    Let,
    Assignment,
    If,
    While,
    Print,
    ExpressionStatement,
    Return,
    Program,
    # Utilities
    print_ast,
)

from .errors import (
    ErrorSeverity,
    Diagnostic,
    TreelangError,
    LexerError,
    ParserError,
    InterpreterError,
    UnknownExpression,
    UnknownStatement,
    UndefinedVariable,
    DuplicateDeclaration,
    AssignmentToUndeclared,
    TypeError,
    DivisionByZero,
    NonBooleanCondition,
    NotCallable,
    ArityMismatch,
    MissingReturnValue,
    ReturnOutsideFunction,
    RecursionLimitExceeded,
)

from .serialization import (
    expression_from_dict,
    statement_from_dict,
    program_from_json,
    program_to_dict,
    program_to_json,
)

from .runtime import (
    Value,
    ValueKind,
    Frame,
    Interpreter,
    ExecutionResult,
    evaluate,
    execute,
    execute_statement,
    run,
    compile_and_run,
    format_value,
)

__all__ = [
    # Tokens
    'Token',
    'TokenType',
    'SourceLocation',
    'SourceSpan',
    'KEYWORDS',
    'is_keyword',
    # Lexer
    'Lexer',
    'tokenize',
    # Parser
    'Parser',
    'parse',
    'parse_program',
    'parse_expression',
    # AST
    'AstNode',
    'AstVisitor',
    'BinaryOperator',
    'Expression',
    'NumberLiteral',
    'BooleanLiteral',
    'Variable',
    'BinaryOp',
    'FunctionLiteral',
    'Call',
    'Statement',
    'Let',
    'Assignment',
    'If',
    'While',
    'Print',
    'ExpressionStatement',
    'Return',
    'Program',
    'print_ast',
    # Errors
    'ErrorSeverity',
    'Diagnostic',
    'TreelangError',
    'LexerError',
    'ParserError',
    'InterpreterError',
    'UnknownExpression',
    'UnknownStatement',
    'UndefinedVariable',
    'DuplicateDeclaration',
    'AssignmentToUndeclared',
    'TypeError',
    'DivisionByZero',
    'NonBooleanCondition',
    'NotCallable',
    'ArityMismatch',
    'MissingReturnValue',
    'ReturnOutsideFunction',
    'RecursionLimitExceeded',
    # Serialization
    'expression_from_dict',
    'statement_from_dict',
    'program_from_json',
    'program_to_dict',
    'program_to_json',
    # Runtime
    'Value',
    'ValueKind',
    'Frame',
    'Interpreter',
    'ExecutionResult',
    'evaluate',
    'execute',
    'execute_statement',
    'run',
    'compile_and_run',
    'format_value',
]

"""
Bantam Parser

Predictive recursive descent parser that builds an AST from the token
stream of a Scanner, with one token of lookahead.
"""

import logging
from typing import IO, List, NoReturn, Optional, Union

from .tokens import Token, TokenKind
from .scanner import Scanner
from .errors import CompilationError, ErrorHandler, ErrorKind
from .ast import *


logger = logging.getLogger(__name__)

RECEIVERS = ("this", "super")


class Parser:
    """Recursive descent parser for Bantam."""

    def __init__(self, error_handler: Optional[ErrorHandler] = None):
        """
        Initialize the parser.

        Args:
            error_handler: Collector for lexical and parse errors
        """
        self.error_handler = error_handler if error_handler is not None else ErrorHandler()
        self.scanner: Optional[Scanner] = None
        self.filename: Optional[str] = None
        self.current: Optional[Token] = None

    def parse(self, source: Union[str, IO[str]]) -> Program:
        """
        Parse a source file into an AST.

        Args:
            source: Filename or open text stream holding a Bantam program

        Returns:
            Program AST node

        Raises:
            CompilationError: On the first parse error, or at the end of
                the parse if lexical errors were collected
            OSError: If the source cannot be read
        """
        with Scanner(source, self.error_handler) as scanner:
            self.scanner = scanner
            self.filename = scanner.filename
            logger.debug("parsing %s", self.filename)

            self.current = None
            self.advance()
            program = self.program()

        if self.error_handler.errors_found():
            raise CompilationError(self.error_handler)

        logger.debug("parsed %s: %d classes", self.filename, len(program.class_list))
        return program

    # =========================================================================
    # Program and Classes
    # =========================================================================

    def program(self) -> Program:
        """Parse a whole program: zero or more classes."""
        line = self.current.line_num
        classes = []

        while not self.is_at_end():
            classes.append(self.class_declaration())

        return Program(line, ClassList(line, classes))

    def class_declaration(self) -> Class_:
        """Parse a class declaration."""
        line = self.current.line_num
        self.consume(TokenKind.CLASS, "Expected 'class'")
        name = self.identifier("Expected class name")

        parent = None
        if self.match(TokenKind.EXTENDS):
            parent = self.identifier("Expected parent class name after 'extends'")

        members_line = self.consume(TokenKind.LCURLY, "Expected '{' before class body").line_num
        members = []
        while not self.check(TokenKind.RCURLY) and not self.is_at_end():
            members.append(self.member())
        self.consume(TokenKind.RCURLY, "Expected '}' after class body")

        return Class_(line, name, parent, MemberList(members_line, members), self.filename)

    def member(self) -> Member:
        """Parse a field or a method."""
        line = self.current.line_num
        type_name = self.identifier("Expected type name")
        name = self.identifier("Expected member name")

        if self.match(TokenKind.ASSIGN):
            init = self.expression()
            self.consume(TokenKind.SEMICOLON, "Expected ';' after field declaration")
            return Field(line, type_name, name, init)

        if self.match(TokenKind.SEMICOLON):
            return Field(line, type_name, name, None)

        if self.check(TokenKind.LPAREN):
            formals_line = self.advance().line_num
            formals = self.parameters()
            self.consume(TokenKind.RPAREN, "Expected ')' after parameters")

            if not self.check(TokenKind.LCURLY):
                self.error("Expected '{' before method body")
            body = self.block()

            return Method(line, type_name, name, FormalList(formals_line, formals), body.stmt_list)

        self.error("Expected '(', '=' or ';' after member name")

    def parameters(self) -> List[Formal]:
        """Parse method parameters."""
        formals = []

        if not self.check(TokenKind.RPAREN):
            formals.append(self.formal())
            while self.match(TokenKind.COMMA):
                formals.append(self.formal())

        return formals

    def formal(self) -> Formal:
        line = self.current.line_num
        type_name = self.identifier("Expected parameter type")
        name = self.identifier("Expected parameter name")
        return Formal(line, type_name, name)

    # =========================================================================
    # Statements
    # =========================================================================

    def statement(self) -> Stmt:
        """Parse a statement."""
        kind = self.current.kind

        if kind == TokenKind.IF:
            return self.if_statement()
        if kind == TokenKind.WHILE:
            return self.while_statement()
        if kind == TokenKind.FOR:
            return self.for_statement()
        if kind == TokenKind.BREAK:
            return self.break_statement()
        if kind == TokenKind.RETURN:
            return self.return_statement()
        if kind == TokenKind.VAR:
            return self.var_declaration()
        if kind == TokenKind.LCURLY:
            return self.block()

        return self.expression_statement()

    def if_statement(self) -> IfStmt:
        """Parse an if statement; an else binds to the nearest if."""
        line = self.advance().line_num
        self.consume(TokenKind.LPAREN, "Expected '(' after 'if'")
        condition = self.expression()
        self.consume(TokenKind.RPAREN, "Expected ')' after if condition")

        then_branch = self.statement()

        else_branch = None
        if self.match(TokenKind.ELSE):
            else_branch = self.statement()

        return IfStmt(line, condition, then_branch, else_branch)

    def while_statement(self) -> WhileStmt:
        line = self.advance().line_num
        self.consume(TokenKind.LPAREN, "Expected '(' after 'while'")
        condition = self.expression()
        self.consume(TokenKind.RPAREN, "Expected ')' after while condition")

        body = self.statement()

        return WhileStmt(line, condition, body)

    def for_statement(self) -> ForStmt:
        """Parse a for statement; each of the three header slots may be empty."""
        line = self.advance().line_num
        self.consume(TokenKind.LPAREN, "Expected '(' after 'for'")

        initializer = None
        if not self.check(TokenKind.SEMICOLON):
            initializer = self.expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after for initializer")

        condition = None
        if not self.check(TokenKind.SEMICOLON):
            condition = self.expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after for condition")

        update = None
        if not self.check(TokenKind.RPAREN):
            update = self.expression()
        self.consume(TokenKind.RPAREN, "Expected ')' after for clauses")

        body = self.statement()

        return ForStmt(line, initializer, condition, update, body)

    def break_statement(self) -> BreakStmt:
        line = self.advance().line_num
        self.consume(TokenKind.SEMICOLON, "Expected ';' after 'break'")
        return BreakStmt(line)

    def return_statement(self) -> ReturnStmt:
        line = self.advance().line_num

        value = None
        if not self.check(TokenKind.SEMICOLON):
            value = self.expression()

        self.consume(TokenKind.SEMICOLON, "Expected ';' after return value")
        return ReturnStmt(line, value)

    def var_declaration(self) -> DeclStmt:
        """Parse a local variable declaration, which must have an initializer."""
        line = self.advance().line_num
        name = self.identifier("Expected variable name after 'var'")
        self.consume(TokenKind.ASSIGN, "Expected '=' after variable name: local variables must be initialized")
        initializer = self.expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after variable declaration")
        return DeclStmt(line, name, initializer)

    def block(self) -> BlockStmt:
        """Parse a block of statements."""
        line = self.consume(TokenKind.LCURLY, "Expected '{'").line_num
        statements = []

        while not self.check(TokenKind.RCURLY) and not self.is_at_end():
            statements.append(self.statement())

        self.consume(TokenKind.RCURLY, "Expected '}' after block")
        return BlockStmt(line, StmtList(line, statements))

    def expression_statement(self) -> ExprStmt:
        line = self.current.line_num
        expr = self.expression()
        self.consume(TokenKind.SEMICOLON, "Expected ';' after expression")
        return ExprStmt(line, expr)

    # =========================================================================
    # Expressions
    # =========================================================================

    def expression(self) -> Expr:
        """Parse an expression, including right-associative assignment."""
        line = self.current.line_num
        parenthesized = self.check(TokenKind.LPAREN)
        expr = self.or_expr()

        if self.check(TokenKind.ASSIGN):
            # "(a) = 1" is not a plain variable even though it parses to one
            if parenthesized or not isinstance(expr, VarExpr):
                self.error("Invalid assignment target: a variable is required")
            self.advance()
            value = self.expression()
            ref_name = expr.ref.name if expr.ref is not None else None
            return AssignExpr(line, ref_name, expr.name, value)

        return expr

    def or_expr(self) -> Expr:
        """Parse a logical OR expression."""
        line = self.current.line_num
        expr = self.and_expr()

        while self.current.is_operator('||'):
            self.advance()
            right = self.and_expr()
            expr = BinaryLogicOrExpr(line, expr, right)

        return expr

    def and_expr(self) -> Expr:
        """Parse a logical AND expression."""
        line = self.current.line_num
        expr = self.equality()

        while self.current.is_operator('&&'):
            self.advance()
            right = self.equality()
            expr = BinaryLogicAndExpr(line, expr, right)

        return expr

    def equality(self) -> Expr:
        """Parse an equality expression; at most one operator (non-associative)."""
        line = self.current.line_num
        expr = self.comparison()

        if self.current.is_operator('=='):
            self.advance()
            return BinaryCompEqExpr(line, expr, self.comparison())
        if self.current.is_operator('!='):
            self.advance()
            return BinaryCompNeExpr(line, expr, self.comparison())

        return expr

    def comparison(self) -> Expr:
        """Parse a relational expression; at most one operator (non-associative)."""
        line = self.current.line_num
        expr = self.term()

        if self.current.is_operator('<', '>', '<=', '>='):
            node_class = {
                '<': BinaryCompLtExpr,
                '>': BinaryCompGtExpr,
                '<=': BinaryCompLeqExpr,
                '>=': BinaryCompGeqExpr,
            }[self.advance().spelling]
            return node_class(line, expr, self.term())

        return expr

    def term(self) -> Expr:
        """Parse addition/subtraction."""
        line = self.current.line_num
        expr = self.factor()

        while self.current.is_operator('+', '-'):
            operator = self.advance()
            right = self.factor()
            if operator.spelling == '+':
                expr = BinaryArithPlusExpr(line, expr, right)
            else:
                expr = BinaryArithMinusExpr(line, expr, right)

        return expr

    def factor(self) -> Expr:
        """Parse multiplication/division/modulo."""
        line = self.current.line_num
        expr = self.unary()

        while self.current.is_operator('*', '/', '%'):
            node_class = {
                '*': BinaryArithTimesExpr,
                '/': BinaryArithDivideExpr,
                '%': BinaryArithModulusExpr,
            }[self.advance().spelling]
            expr = node_class(line, expr, self.unary())

        return expr

    def unary(self) -> Expr:
        """Parse a new expression, a cast or a prefix expression."""
        if self.check(TokenKind.NEW):
            return self.new_expression()
        if self.check(TokenKind.CAST):
            return self.cast_expression()
        return self.prefix()

    def new_expression(self) -> NewExpr:
        line = self.advance().line_num
        type_name = self.identifier("Expected class name after 'new'")
        self.consume(TokenKind.LPAREN, "Expected '(' after class name in 'new'")
        self.consume(TokenKind.RPAREN, "Expected ')': 'new' takes no arguments")
        return NewExpr(line, type_name)

    def cast_expression(self) -> CastExpr:
        line = self.advance().line_num
        self.consume(TokenKind.LPAREN, "Expected '(' after 'cast'")
        type_name = self.identifier("Expected type name in cast")
        self.consume(TokenKind.COMMA, "Expected ',' after cast type")
        expr = self.expression()
        self.consume(TokenKind.RPAREN, "Expected ')' after cast expression")
        return CastExpr(line, type_name, expr)

    def prefix(self) -> Expr:
        """Parse prefix operators (-, !, ++, --), which nest to the right."""
        line = self.current.line_num

        if self.current.is_operator('-'):
            self.advance()
            return UnaryNegExpr(line, self.prefix())
        if self.check(TokenKind.UNARYNOT):
            self.advance()
            return UnaryNotExpr(line, self.prefix())
        if self.check(TokenKind.UNARYINCR):
            self.advance()
            return UnaryIncrExpr(line, self.prefix(), False)
        if self.check(TokenKind.UNARYDECR):
            self.advance()
            return UnaryDecrExpr(line, self.prefix(), False)

        return self.postfix()

    def postfix(self) -> Expr:
        """Parse a primary expression with an optional ++ or -- suffix."""
        line = self.current.line_num
        expr = self.primary()

        if self.match(TokenKind.UNARYINCR):
            return UnaryIncrExpr(line, expr, True)
        if self.match(TokenKind.UNARYDECR):
            return UnaryDecrExpr(line, expr, True)

        return expr

    def primary(self) -> Expr:
        """Parse primary expressions."""
        token = self.current

        if self.match(TokenKind.LPAREN):
            expr = self.expression()
            self.consume(TokenKind.RPAREN, "Expected ')' after expression")
            return expr

        if self.match(TokenKind.INTCONST):
            return ConstIntExpr(token.line_num, token.spelling)
        if self.match(TokenKind.BOOLEAN):
            return ConstBooleanExpr(token.line_num, token.spelling)
        if self.match(TokenKind.STRCONST):
            return ConstStringExpr(token.line_num, token.spelling)

        if self.check(TokenKind.IDENTIFIER):
            return self.var_or_call()

        self.error("Expected expression")

    def var_or_call(self) -> Expr:
        """Parse a variable reference or a method call, optionally qualified by this/super."""
        line = self.current.line_num
        name = self.advance().spelling

        ref = None
        if name in RECEIVERS and self.match(TokenKind.DOT):
            ref = VarExpr(line, None, name)
            name = self.identifier(f"Expected name after '{ref.name}.'")

        if self.check(TokenKind.LPAREN):
            args_line = self.advance().line_num
            arguments = self.arguments()
            self.consume(TokenKind.RPAREN, "Expected ')' after arguments")
            return DispatchExpr(line, ref, name, ExprList(args_line, arguments))

        return VarExpr(line, ref, name)

    def arguments(self) -> List[Expr]:
        """Parse method call arguments."""
        arguments = []

        if not self.check(TokenKind.RPAREN):
            arguments.append(self.expression())
            while self.match(TokenKind.COMMA):
                arguments.append(self.expression())

        return arguments

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def advance(self) -> Token:
        """Consume the current token and fetch the next one, skipping comments."""
        previous = self.current
        self.current = self.scanner.scan()
        while self.current.kind == TokenKind.COMMENT:
            self.current = self.scanner.scan()
        return previous

    def check(self, kind: TokenKind) -> bool:
        """Check if the current token is of the given kind."""
        return self.current.kind == kind

    def match(self, kind: TokenKind) -> bool:
        """Consume the current token if it is of the given kind."""
        if self.check(kind):
            self.advance()
            return True
        return False

    def is_at_end(self) -> bool:
        return self.current.kind == TokenKind.EOF

    def consume(self, kind: TokenKind, message: str) -> Token:
        """Consume a token of the expected kind or fail with a parse error."""
        if self.check(kind):
            return self.advance()
        self.error(message)

    def identifier(self, message: str) -> str:
        """Consume an identifier and return its spelling."""
        return self.consume(TokenKind.IDENTIFIER, message).spelling

    def error(self, message: str) -> NoReturn:
        """Register a parse error at the current token and abort the parse."""
        token = self.current
        found = "end of file" if token.kind == TokenKind.EOF else f"'{token.spelling}'"
        self.error_handler.register(
            ErrorKind.PARSE_ERROR, f"{message}, found {found}", token.line_num, self.filename
        )
        raise CompilationError(self.error_handler)

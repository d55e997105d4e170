"""Recursive-descent parser for minilang. Produces a Program from source text.

Orders of precedence, loosest to tightest:
    assignment      right-associative, `a = b = c`
    object literal  `{ a, b: expr }`
    additive        left-associative, `+ -`
    multiplicative  left-associative, `* / %`
    call / member   `f(x)(y)`, `a.b`, `a[expr]`
    primary         identifier, number, `( expr )`

Grammar:

```
<program>  ::= <stmt>*
<stmt>     ::= <var_decl> | <expr> ";"?
<var_decl> ::= ("let" | "const") <identifier> ("=" <expr>)? ";"    ; const requires "="
```

Any error aborts the whole parse with a ParseError: there is no recovery and no partial tree.
"""

from minilang.frontend.ast import (AssignmentExpr, BinaryExpr, CallExpr, Identifier, MemberExpr, NumericLiteral,
                                   ObjectLiteral, Program, Property, VarDeclaration)
from minilang.frontend.lexical import TokenType, tokenize
from minilang.lang.error import ParseError

ADDITIVE = ("+", "-")
MULTIPLICATIVE = ("*", "/", "%")


class Parser:
    """Walks a token list with an index cursor. A Parser can be reused: every produce_ast call starts over."""

    def __init__(self):
        self.tokens = []
        self.pos = 0

    def produce_ast(self, source):
        """Tokenizes and parses source, returning its Program."""
        self.tokens = tokenize(source)
        self.pos = 0

        program = Program()
        while self.not_eof():
            program.body.append(self.parse_stmt())
        return program

    # token stream

    def not_eof(self):
        return self.at().type is not TokenType.EOF

    def at(self):
        return self.tokens[self.pos]

    def eat(self):
        token = self.tokens[self.pos]
        if token.type is not TokenType.EOF:
            self.pos += 1
        return token

    def expect(self, token_type, msg):
        """Eats the current token if it has type token_type, otherwise raises a ParseError with msg."""
        token = self.eat()
        if token.type is not token_type:
            raise self.error(msg + ", found '{}'", token)
        return token

    @staticmethod
    def error(msg, token):
        width = 1 if token.type is TokenType.EOF else len(token.value)
        return ParseError(msg, token.value, line_num=token.line, start=token.column, end=token.column + width)

    # statements

    def parse_stmt(self):
        if self.at().type in (TokenType.LET, TokenType.CONST):
            return self.parse_var_declaration()

        expr = self.parse_expr()
        if self.at().type is TokenType.SEMICOLON:
            self.eat()
        return expr

    def parse_var_declaration(self):
        """let <ident>; | (let | const) <ident> = <expr>;"""
        is_constant = self.eat().type is TokenType.CONST
        identifier = self.expect(TokenType.IDENTIFIER, "expected identifier name following let | const keywords").value

        if self.at().type is TokenType.SEMICOLON:
            token = self.eat()
            if is_constant:
                raise self.error("must assign value to constant expression, found '{}'", token)
            return VarDeclaration(identifier, constant=False)

        self.expect(TokenType.EQUALS, "expected equals token following identifier in var declaration")
        declaration = VarDeclaration(identifier, constant=is_constant, value=self.parse_expr())
        self.expect(TokenType.SEMICOLON, "variable declaration statement must end with semicolon")

        return declaration

    # expressions

    def parse_expr(self):
        return self.parse_assignment_expr()

    def parse_assignment_expr(self):
        left = self.parse_object_expr()

        if self.at().type is TokenType.EQUALS:
            self.eat()
            value = self.parse_assignment_expr()  # recurse for right associativity
            return AssignmentExpr(left, value)

        return left

    def parse_object_expr(self):
        if self.at().type is not TokenType.OPEN_BRACE:
            return self.parse_additive_expr()

        self.eat()
        properties = []

        while self.not_eof() and self.at().type is not TokenType.CLOSE_BRACE:
            key = self.expect(TokenType.IDENTIFIER, "object literal key expected").value

            # shorthand: { key, } or { key }
            if self.at().type is TokenType.COMMA:
                self.eat()
                properties.append(Property(key))
                continue
            elif self.at().type is TokenType.CLOSE_BRACE:
                properties.append(Property(key))
                continue

            self.expect(TokenType.COLON, "missing colon following identifier in object literal")
            properties.append(Property(key, self.parse_expr()))

            if self.at().type is not TokenType.CLOSE_BRACE:
                self.expect(TokenType.COMMA, "expected comma or closing brace following property")

        self.expect(TokenType.CLOSE_BRACE, "object literal missing closing brace")
        return ObjectLiteral(properties)

    def parse_additive_expr(self):
        left = self.parse_multiplicative_expr()

        while self.at().value in ADDITIVE and self.at().type is TokenType.BINARY_OPERATOR:
            operator = self.eat().value
            left = BinaryExpr(left, self.parse_multiplicative_expr(), operator)

        return left

    def parse_multiplicative_expr(self):
        left = self.parse_call_member_expr()

        while self.at().value in MULTIPLICATIVE and self.at().type is TokenType.BINARY_OPERATOR:
            operator = self.eat().value
            left = BinaryExpr(left, self.parse_call_member_expr(), operator)

        return left

    def parse_call_member_expr(self):
        member = self.parse_member_expr()

        if self.at().type is TokenType.OPEN_PAREN:
            return self.parse_call_expr(member)
        return member

    def parse_call_expr(self, caller):
        call = CallExpr(caller, self.parse_args())

        if self.at().type is TokenType.OPEN_PAREN:  # curried calls: f()()
            call = self.parse_call_expr(call)
        return call

    def parse_args(self):
        self.expect(TokenType.OPEN_PAREN, "expected open parenthesis")
        args = [] if self.at().type is TokenType.CLOSE_PAREN else self.parse_arguments_list()
        self.expect(TokenType.CLOSE_PAREN, "missing closing parenthesis inside arguments list")
        return args

    def parse_arguments_list(self):
        args = [self.parse_assignment_expr()]

        while self.at().type is TokenType.COMMA:
            self.eat()
            args.append(self.parse_assignment_expr())

        return args

    def parse_member_expr(self):
        obj = self.parse_primary_expr()

        while self.at().type in (TokenType.DOT, TokenType.OPEN_BRACKET):
            operator = self.eat()

            if operator.type is TokenType.DOT:
                if self.at().type is not TokenType.IDENTIFIER:
                    raise self.error("cannot use dot operator without right hand side being an identifier, got '{}'",
                                     self.at())
                obj = MemberExpr(obj, Identifier(self.eat().value), computed=False)
            else:
                prop = self.parse_expr()
                self.expect(TokenType.CLOSE_BRACKET, "missing closing bracket in computed value")
                obj = MemberExpr(obj, prop, computed=True)

        return obj

    def parse_primary_expr(self):
        token = self.at()

        if token.type is TokenType.IDENTIFIER:
            return Identifier(self.eat().value)

        elif token.type is TokenType.NUMBER:
            return NumericLiteral(float(self.eat().value))

        elif token.type is TokenType.OPEN_PAREN:
            self.eat()
            value = self.parse_expr()
            self.expect(TokenType.CLOSE_PAREN, "unexpected token found inside parenthesised expression, expected ')'")
            return value

        raise self.error("unexpected token '{}' found during parsing", token)

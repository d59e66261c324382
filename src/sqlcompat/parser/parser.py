"""
Recursive-descent statement parser driven by dialect grammar tables.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator, List, Sequence

from ..dialects import Dialect, FeatureTag, GrammarRule, GrammarTable, Production, get_grammar
from ..errors import ParseError
from ..lexer import Token, TokenKind
from ..utils import get_logger
from .splitter import StatementSource, split_statements
from .statements import (
    AbstractStatement,
    AlterAction,
    Column,
    Constraint,
    ConstraintKind,
    IndexElement,
    Node,
    ParseFailure,
    ParseOutcome,
    QualifiedName,
    StatementFlag,
    StatementKind,
    TableOption,
)

_STATEMENT_KINDS = {
    Production.CREATE_TABLE: StatementKind.CREATE_TABLE,
    Production.CREATE_INDEX: StatementKind.CREATE_INDEX,
    Production.CREATE_VIEW: StatementKind.CREATE_VIEW,
    Production.ALTER_TABLE: StatementKind.ALTER_TABLE,
    Production.DROP_TABLE: StatementKind.DROP_TABLE,
    Production.DROP_INDEX: StatementKind.DROP_INDEX,
    Production.DROP_VIEW: StatementKind.DROP_VIEW,
    Production.INSERT: StatementKind.INSERT,
    Production.SELECT: StatementKind.SELECT,
    Production.UPDATE: StatementKind.UPDATE,
    Production.DELETE: StatementKind.DELETE,
}

_SIMPLE_CONSTRAINTS = {
    Production.PRIMARY_KEY: ConstraintKind.PRIMARY_KEY,
    Production.NOT_NULL: ConstraintKind.NOT_NULL,
    Production.NULL: ConstraintKind.NULL,
    Production.UNIQUE: ConstraintKind.UNIQUE,
}

_DROP_TARGETS = ("INDEX", "KEY", "PRIMARY", "FOREIGN", "CHECK", "CONSTRAINT")
_BINARY_OPERATORS = ("+", "-", "*", "/", "%", "||")


class StatementParser:
    """
    Parses SQL source into one outcome per top-level statement.

    A statement that fails to lex or parse becomes a ``ParseFailure`` and
    parsing resumes with the next statement.
    """

    def __init__(self, dialect: Dialect | str | GrammarTable) -> None:
        self.grammar = dialect if isinstance(dialect, GrammarTable) else get_grammar(dialect)
        self.dialect = self.grammar.dialect
        self.logger = get_logger("parser")

    def parse(self, source: str) -> List[ParseOutcome]:
        return list(self.iter_parse(source))

    def iter_parse(self, source: str) -> Iterator[ParseOutcome]:
        for statement in split_statements(source, self.grammar):
            yield self.parse_one(statement)

    def parse_one(self, statement: StatementSource) -> ParseOutcome:
        error = statement.lex_error
        if error is None:
            try:
                return _StatementBuilder(self.grammar, statement).build()
            except ParseError as exc:
                error = exc
        self.logger.warning(
            "Statement %d failed (%s); resuming at next statement",
            statement.index,
            error.message,
            extra={"dialect": self.dialect.value, "position": error.position},
        )
        return ParseFailure(
            index=statement.index,
            text=statement.text,
            start=statement.start,
            end=statement.end,
            error=error,
            dialect=self.dialect,
        )


def parse(source: str, dialect: Dialect | str) -> List[ParseOutcome]:
    return StatementParser(dialect).parse(source)


def schema_catalog(outcomes: Iterable[ParseOutcome]) -> Dict[str, Dict[str, str | None]]:
    """
    Map each created table to its ``{column: data type}`` definitions.
    """

    tables: Dict[str, Dict[str, str | None]] = {}
    for outcome in outcomes:
        if not isinstance(outcome, AbstractStatement) or outcome.name is None:
            continue
        if outcome.kind is StatementKind.CREATE_TABLE:
            tables[str(outcome.name)] = {column.name: column.data_type for column in outcome.columns}
        elif outcome.kind is StatementKind.ALTER_TABLE and str(outcome.name) in tables:
            tables[str(outcome.name)].update({column.name: column.data_type for column in outcome.columns})
    return tables


class _StatementBuilder:
    """Single-use cursor over the tokens of one statement."""

    def __init__(self, grammar: GrammarTable, statement: StatementSource) -> None:
        self.grammar = grammar
        self.statement = statement
        self.tokens: Sequence[Token] = statement.tokens
        self.pos = 0
        self.kind: StatementKind | None = None
        self.name: QualifiedName | None = None
        self.target: QualifiedName | None = None
        self.flags: set[StatementFlag] = set()
        self.children: List[Node] = []
        self.tags: List[FeatureTag] = []
        self._handlers: Dict[Production, Callable[[GrammarRule], None]] = {
            Production.CREATE_TABLE: self._create_table,
            Production.CREATE_INDEX: self._create_index,
            Production.CREATE_VIEW: self._create_view,
            Production.ALTER_TABLE: self._alter_table,
            Production.DROP_TABLE: self._drop,
            Production.DROP_INDEX: self._drop,
            Production.DROP_VIEW: self._drop,
            Production.INSERT: self._dml,
            Production.UPDATE: self._dml,
            Production.DELETE: self._dml,
            Production.SELECT: self._select,
        }

    def build(self) -> AbstractStatement:
        rule = self._take("statements")
        if rule is None:
            raise self._error("statement keyword such as CREATE, ALTER, DROP, INSERT or SELECT")
        self.kind = _STATEMENT_KINDS[rule.production]
        if rule.tag:
            self.tags.append(rule.tag)
        words = set(rule.keywords)
        if words & {"TEMPORARY", "TEMP"}:
            self.flags.add(StatementFlag.TEMPORARY)
        if "UNIQUE" in words:
            self.flags.add(StatementFlag.UNIQUE)
        if rule.keywords[0] == "CREATE" and {"OR", "REPLACE"} <= words:
            self.flags.add(StatementFlag.OR_REPLACE)
        self._handlers[rule.production](rule)
        statement = self.statement
        return AbstractStatement(
            index=statement.index,
            kind=self.kind,
            dialect=self.grammar.dialect,
            text=statement.text,
            start=statement.start,
            end=statement.end,
            name=self.name,
            target=self.target,
            flags=frozenset(self.flags),
            children=tuple(self.children),
            tags=tuple(dict.fromkeys(self.tags)),
        )

    # Cursor helpers ---------------------------------------------------
    def _peek(self, offset: int = 0) -> Token | None:
        index = self.pos + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def _next(self, expected: str = "more input") -> Token:
        token = self._peek()
        if token is None:
            raise self._error(expected)
        self.pos += 1
        return token

    def _at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def _error(self, expected: str) -> ParseError:
        token = self._peek()
        if token is None:
            return ParseError(self.statement.end, expected, None)
        return ParseError(token.position, expected, token.text)

    def _accept(self, *words: str) -> bool:
        window = self.tokens[self.pos : self.pos + len(words)]
        if len(window) == len(words) and all(token.keyword == word for token, word in zip(window, words)):
            self.pos += len(words)
            return True
        return False

    def _expect(self, *words: str) -> None:
        if not self._accept(*words):
            raise self._error(" ".join(words))

    def _at(self, *words: str) -> bool:
        token = self._peek()
        return token is not None and token.matches(*words)

    def _match(self, section: str):
        return self.grammar.match(section, self.tokens, self.pos)

    def _take(self, section: str):
        found = self._match(section)
        if found is None:
            return None
        rule, width = found
        self.pos += width
        return rule

    def _slice(self, first: Token, last: Token) -> str:
        offset = self.statement.start
        return self.statement.text[first.position - offset : last.end - offset]

    # Names ------------------------------------------------------------
    def _name(self, expected: str) -> str:
        token = self._peek()
        if token is None or not token.is_name:
            raise self._error(expected)
        self.pos += 1
        return token.value if token.quoted else token.text

    def _qualified_name(self, expected: str, tags: List[FeatureTag] | None = None) -> QualifiedName:
        parts = [self._name(expected)]
        while self._at("."):
            self.pos += 1
            parts.append(self._name(expected))
        if len(parts) > 3:
            raise ParseError(self.tokens[self.pos - 1].position, f"{expected} with at most three parts", str(".".join(parts)))
        qualified = QualifiedName(tuple(parts))
        sink = self.tags if tags is None else tags
        if len(parts) == 2:
            sink.append(FeatureTag.QUALIFIED_NAME)
        elif len(parts) == 3:
            sink.append(FeatureTag.CATALOG_QUALIFIED_NAME)
        return qualified

    def _key_columns(self, tags: List[FeatureTag]) -> tuple[str, ...]:
        self._expect("(")
        columns: List[str] = []
        while True:
            columns.append(self._name("column name"))
            if self._at("(") and self.grammar.index_prefix_lengths:
                self.pos += 1
                self._literal("prefix length")
                self._expect(")")
                tags.append(FeatureTag.INDEX_PREFIX_LENGTH)
            self._accept("ASC") or self._accept("DESC")
            if self._at(","):
                self.pos += 1
                continue
            self._expect(")")
            return tuple(columns)

    def _literal(self, expected: str) -> str:
        token = self._peek()
        if token is None or token.kind is not TokenKind.LITERAL:
            raise self._error(expected)
        self.pos += 1
        return token.text

    def _if_not_exists(self) -> None:
        if self._accept("IF", "NOT", "EXISTS"):
            self.flags.add(StatementFlag.IF_NOT_EXISTS)

    def _if_exists(self) -> None:
        if self._accept("IF", "EXISTS"):
            self.flags.add(StatementFlag.IF_EXISTS)

    # Expressions ------------------------------------------------------
    def _note_expression(self, token: Token, tags: List[FeatureTag]) -> None:
        word = token.keyword
        if word is not None and word in self.grammar.expression_operators:
            tags.append(self.grammar.expression_operators[word])
        elif token.is_symbol("::"):
            raise ParseError(token.position, f"operator valid in {self.grammar.dialect.value}", token.text)

    def _balanced(self, tags: List[FeatureTag]) -> str:
        """Consume a parenthesised group and return its inner source text."""
        self._expect("(")
        first = self._peek()
        depth = 1
        while True:
            token = self._next("')'")
            if token.is_symbol("("):
                depth += 1
            elif token.is_symbol(")"):
                depth -= 1
                if depth == 0:
                    if first is token:
                        return ""
                    return self._slice(first, self.tokens[self.pos - 2])
            self._note_expression(token, tags)

    def _term(self, tags: List[FeatureTag]) -> str:
        first = self._peek()
        if first is None:
            raise self._error("expression")
        self._operand(tags)
        while self._at(*_BINARY_OPERATORS) or self._at_cast():
            operator = self._next()
            if operator.is_symbol("::"):
                self._note_expression(operator, tags)
                self._data_type(tags)
            else:
                self._operand(tags)
        return self._slice(first, self.tokens[self.pos - 1])

    def _at_cast(self) -> bool:
        token = self._peek()
        if token is None or not token.is_symbol("::"):
            return False
        if "::" not in self.grammar.expression_operators:
            raise self._error(f"operator valid in {self.grammar.dialect.value}")
        return True

    def _operand(self, tags: List[FeatureTag]) -> None:
        while self._at("+", "-"):
            self.pos += 1
        token = self._peek()
        if token is None:
            raise self._error("expression")
        if token.is_symbol("("):
            self._balanced(tags)
        elif token.kind is TokenKind.LITERAL:
            self.pos += 1
        elif token.is_name:
            self.pos += 1
            self._note_expression(token, tags)
            while self._at(".") and (nxt := self._peek(1)) is not None and nxt.is_name:
                self.pos += 2
            if self._at("("):
                self._balanced(tags)
            elif (literal := self._peek()) is not None and literal.kind is TokenKind.LITERAL:
                # Typed literal such as DATE '2024-01-01'.
                self.pos += 1
        elif token.text == "?" or (token.text[0] in "$:" and token.text[1:2].isalnum()):
            self.pos += 1
        else:
            raise self._error("expression")

    def _skip_clause(self, tags: List[FeatureTag]) -> None:
        """Consume tokens up to the next top-level comma or the end."""
        depth = 0
        while not self._at_end():
            token = self._peek()
            if depth == 0 and token.is_symbol(","):
                return
            if token.is_symbol("("):
                depth += 1
            elif token.is_symbol(")"):
                depth -= 1
            self._note_expression(token, tags)
            self.pos += 1

    def _scan_tail(self) -> None:
        while not self._at_end():
            found = self._match("clause_markers")
            if found is not None:
                rule, width = found
                self.tags.append(rule.tag)
                self.pos += width
                continue
            self._note_expression(self.tokens[self.pos], self.tags)
            self.pos += 1

    # Data types -------------------------------------------------------
    def _data_type(self, tags: List[FeatureTag]) -> str:
        token = self._peek()
        rule = self._take("types")
        if rule is not None:
            text = rule.text
            if rule.tag:
                tags.append(rule.tag)
        elif self._is_user_type(token):
            text = str(self._qualified_name("data type", []))
            tags.append(self.grammar.user_type_tag)
        else:
            raise self._error("data type")
        if self._at("("):
            if rule is not None and rule.max_params == 0:
                raise self._error(f"{rule.text} without a length or precision")
            params = self._type_params(rule)
            if rule is not None and rule.param_tag:
                tags.append(rule.param_tag)
            text += f"({', '.join(params)})"
        while True:
            suffix = self._take("type_suffixes")
            if suffix is None:
                return text
            if suffix.tag:
                tags.append(suffix.tag)
            if suffix.production is Production.TYPE_ARRAY:
                if suffix.keywords == ("[",) or self._at("["):
                    if suffix.keywords != ("[",):
                        self.pos += 1
                    if not self._at("]"):
                        self._literal("array dimension")
                    self._expect("]")
                text += "[]"
            else:
                text += f" {suffix.text}"

    def _is_user_type(self, token: Token | None) -> bool:
        if token is None or self.grammar.user_type_tag is None or not token.is_name:
            return False
        return token.quoted or not self.grammar.is_keyword(token.text)

    def _type_params(self, rule) -> List[str]:
        self._expect("(")
        params: List[str] = []
        while True:
            token = self._next("type parameter")
            if token.is_symbol("-"):
                token = self._next("type parameter")
                params.append(f"-{token.text}")
            elif token.kind is TokenKind.LITERAL or token.is_word:
                if rule is not None and rule.string_params and not token.text.startswith(("'", '"')):
                    raise ParseError(token.position, f"quoted value for {rule.text}", token.text)
                params.append(token.text)
            else:
                raise ParseError(token.position, "type parameter", token.text)
            if self._at(","):
                self.pos += 1
                continue
            self._expect(")")
            break
        if rule is not None and 0 <= rule.max_params < len(params):
            raise ParseError(self.tokens[self.pos - 1].position, f"at most {rule.max_params} parameters for {rule.text}", params[rule.max_params])
        return params

    # CREATE TABLE -----------------------------------------------------
    def _create_table(self, rule: GrammarRule) -> None:
        self._if_not_exists()
        self.name = self._qualified_name("table name")
        if self._accept("AS"):
            self.flags.add(StatementFlag.AS_QUERY)
            self._scan_tail()
            return
        if not self._at("("):
            raise self._error("'(' or AS")
        self.pos += 1
        while True:
            self._table_element()
            if self._at(","):
                self.pos += 1
                continue
            self._expect(")")
            break
        while not self._at_end():
            if self._at(","):
                self.pos += 1
            start = self._peek()
            option = self._take("table_options")
            if option is None:
                raise self._error("table option or end of statement")
            self._table_option(option, start)

    def _table_option(self, rule: GrammarRule, start: Token) -> None:
        tags = [rule.tag] if rule.tag else []
        value: str | None = None
        if rule.production is Production.OPTION_VALUE:
            self._accept("=")
            token = self._next("option value")
            if not (token.is_name or token.kind is TokenKind.LITERAL):
                raise ParseError(token.position, "option value", token.text)
            value = token.text if token.is_word else token.value
        elif rule.production is Production.OPTION_LIST:
            value = ", ".join(self._key_columns(tags))
        elif rule.production is Production.OPTION_WORDS:
            words: List[str] = []
            while (token := self._peek()) is not None and token.is_word:
                words.append(token.text.upper())
                self.pos += 1
            value = " ".join(words) or None
        self.children.append(TableOption(start.position, tuple(tags), option=rule.text, value=value))

    def _table_element(self) -> None:
        start = self._peek()
        if start is None:
            raise self._error("column or constraint definition")
        found = self._match("table_elements")
        if found is None:
            self._column_definition()
            return
        rule, width = found
        self.pos += width
        constraint_name = None
        if rule.production is Production.CONSTRAINT_NAME:
            constraint_name = self._name("constraint name")
            rule = self._take("table_elements")
            if rule is None or rule.production is Production.CONSTRAINT_NAME:
                raise self._error("constraint definition")
        self._table_constraint(rule, constraint_name, start)

    def _table_constraint(self, rule: GrammarRule, name: str | None, start: Token) -> None:
        tags = [rule.tag] if rule.tag else []
        production = rule.production
        fields: dict = {}
        if production is Production.TABLE_PRIMARY_KEY:
            kind = ConstraintKind.PRIMARY_KEY
            fields["columns"] = self._key_columns(tags)
        elif production is Production.TABLE_UNIQUE:
            kind = ConstraintKind.UNIQUE
            if not self._at("("):
                index_name = self._name("index name")
                name = name or index_name
            fields["columns"] = self._key_columns(tags)
        elif production is Production.TABLE_FOREIGN_KEY:
            kind = ConstraintKind.FOREIGN_KEY
            fields["columns"] = self._key_columns(tags)
            self._expect("REFERENCES")
            fields["references"], fields["ref_columns"] = self._references(tags)
        elif production is Production.TABLE_CHECK:
            kind = ConstraintKind.CHECK
            fields["expression"] = self._balanced(tags)
        elif production is Production.TABLE_INDEX:
            kind = ConstraintKind.INDEX
            if not self._at("(", "USING"):
                index_name = self._name("index name")
                name = name or index_name
            if self._accept("USING"):
                self._name("index method")
            elements = self._index_elements()
            for element in elements:
                tags.extend(element.tags)
            fields["columns"] = tuple(element.column or element.expression for element in elements)
        elif production is Production.TABLE_EXCLUDE:
            kind = ConstraintKind.EXCLUDE
            if self._accept("USING"):
                self._name("index method")
            fields["expression"] = self._balanced(tags)
            if self._accept("WHERE"):
                self._balanced(tags)
        else:
            raise ParseError(start.position, "table constraint", start.text)
        self._constraint_characteristics()
        self.children.append(Constraint(start.position, tuple(dict.fromkeys(tags)), kind=kind, name=name, **fields))

    def _constraint_characteristics(self) -> None:
        while True:
            if self._accept("DEFERRABLE") or self._accept("NOT", "DEFERRABLE"):
                continue
            if self._accept("INITIALLY", "DEFERRED") or self._accept("INITIALLY", "IMMEDIATE"):
                continue
            return

    def _references(self, tags: List[FeatureTag]) -> tuple[QualifiedName, tuple[str, ...]]:
        table = self._qualified_name("referenced table", tags)
        columns = self._key_columns(tags) if self._at("(") else ()
        while True:
            if self._accept("ON", "DELETE") or self._accept("ON", "UPDATE"):
                self._referential_action()
            elif self._accept("MATCH"):
                self._name("match type")
            else:
                return table, columns

    def _referential_action(self) -> None:
        for words in (("CASCADE",), ("RESTRICT",), ("SET", "NULL"), ("SET", "DEFAULT"), ("NO", "ACTION")):
            if self._accept(*words):
                return
        raise self._error("referential action")

    # Columns ----------------------------------------------------------
    def _column_definition(self) -> Column:
        start = self._peek()
        name = self._name("column name")
        tags: List[FeatureTag] = []
        constraints: List[Constraint] = []
        data_type = None
        if not (self.grammar.optional_column_type and self._column_type_omitted()):
            data_type = self._data_type(tags)
        while not self._at_end() and not self._at(",", ")"):
            constraint_name = None
            found = self._match("column_constraints")
            if found is not None and found[0].production is Production.CONSTRAINT_NAME:
                self.pos += found[1]
                constraint_name = self._name("constraint name")
            token = self._peek()
            if token is None:
                raise self._error("column constraint")
            position = token.position
            rule = self._take("column_constraints")
            if rule is None or rule.production is Production.CONSTRAINT_NAME:
                raise self._error("column constraint")
            constraint = self._column_constraint(rule, name, constraint_name, position, tags)
            if constraint is not None:
                constraints.append(constraint)
        column = Column(start.position, tuple(dict.fromkeys(tags)), name=name, data_type=data_type)
        self.children.append(column)
        self.children.extend(constraints)
        return column

    def _column_type_omitted(self) -> bool:
        return self._at_end() or self._at(",", ")") or self._match("column_constraints") is not None

    def _column_constraint(
        self,
        rule: GrammarRule,
        column: str,
        name: str | None,
        position: int,
        column_tags: List[FeatureTag],
    ) -> Constraint | None:
        tags = [rule.tag] if rule.tag else []
        production = rule.production
        fields: dict = {}
        if production in _SIMPLE_CONSTRAINTS:
            kind = _SIMPLE_CONSTRAINTS[production]
            self._accept("ASC") or self._accept("DESC")
            if self._accept("ON", "CONFLICT"):
                self._name("conflict resolution")
            if kind is ConstraintKind.PRIMARY_KEY:
                fields["columns"] = (column,)
        elif production is Production.CHECK:
            kind = ConstraintKind.CHECK
            fields["expression"] = self._balanced(tags)
        elif production is Production.DEFAULT:
            kind = ConstraintKind.DEFAULT
            fields["expression"] = self._term(tags)
        elif production is Production.REFERENCES:
            kind = ConstraintKind.FOREIGN_KEY
            fields["columns"] = (column,)
            fields["references"], fields["ref_columns"] = self._references(tags)
        elif production is Production.GENERATED:
            kind = ConstraintKind.GENERATED
            fields["expression"] = self._balanced(tags)
            if self._accept("STORED") or self._accept("PERSISTENT"):
                tags.append(FeatureTag.GENERATED_COLUMN_STORED)
            else:
                self._accept("VIRTUAL")
                tags.append(FeatureTag.GENERATED_COLUMN_VIRTUAL)
        elif production is Production.IDENTITY:
            kind = ConstraintKind.IDENTITY
            if self._at("("):
                fields["expression"] = self._balanced(tags)
        elif production is Production.COLUMN_FLAG:
            column_tags.extend(tags)
            return None
        elif production is Production.COLUMN_VALUE:
            token = self._next("value")
            if not (token.is_name or token.kind is TokenKind.LITERAL):
                raise ParseError(token.position, "value", token.text)
            column_tags.extend(tags)
            return None
        elif production is Production.ON_UPDATE:
            self._term(tags)
            column_tags.extend(tags)
            return None
        else:
            raise ParseError(position, "column constraint", rule.text)
        return Constraint(position, tuple(dict.fromkeys(tags)), kind=kind, name=name, column=column, **fields)

    # CREATE INDEX / VIEW ----------------------------------------------
    def _create_index(self, rule: GrammarRule) -> None:
        self._if_not_exists()
        if not self._at("ON", "USING"):
            self.name = self._qualified_name("index name")
        while not self._at("ON"):
            self._index_option("ON")
        self._expect("ON")
        self._accept("ONLY")
        self.target = self._qualified_name("table name")
        while not self._at("("):
            self._index_option("'(' or index option")
        self.children.extend(self._index_elements())
        while not self._at_end():
            self._index_option("index option or end of statement")

    def _index_option(self, expected: str) -> None:
        start = self._peek()
        rule = self._take("index_options")
        if rule is None:
            raise self._error(expected)
        tags = [rule.tag] if rule.tag else []
        if rule.production is Production.INDEX_METHOD:
            value = self._name("index method")
        elif rule.production is Production.INDEX_INCLUDE:
            value = ", ".join(self._key_columns(tags))
        else:
            first = self._peek()
            if first is None:
                raise self._error("index predicate")
            self._skip_clause(tags)
            value = self._slice(first, self.tokens[self.pos - 1])
        self.children.append(TableOption(start.position, tuple(dict.fromkeys(tags)), option=rule.text, value=value))

    def _index_elements(self) -> List[IndexElement]:
        self._expect("(")
        elements: List[IndexElement] = []
        while True:
            first = self._peek()
            if first is None or first.is_symbol(")") or first.is_symbol(","):
                raise self._error("index column or expression")
            tags: List[FeatureTag] = []
            begin = self.pos
            depth = 0
            while True:
                token = self._peek()
                if token is None:
                    raise self._error("')'")
                if depth == 0 and (token.is_symbol(",") or token.is_symbol(")")):
                    break
                if token.is_symbol("("):
                    depth += 1
                elif token.is_symbol(")"):
                    depth -= 1
                self._note_expression(token, tags)
                self.pos += 1
            elements.append(self._index_element(self.tokens[begin : self.pos], tags))
            if self._at(","):
                self.pos += 1
                continue
            self._expect(")")
            return elements

    def _index_element(self, parts: Sequence[Token], tags: List[FeatureTag]) -> IndexElement:
        first = parts[0]
        text = self._slice(first, parts[-1])
        rest = list(parts[1:])
        column = None
        if first.is_name:
            prefixed = (
                self.grammar.index_prefix_lengths
                and len(rest) >= 3
                and rest[0].is_symbol("(")
                and rest[1].kind is TokenKind.LITERAL
                and rest[2].is_symbol(")")
            )
            if prefixed:
                rest = rest[3:]
            # Trailing words are ordering, collation or operator class.
            if all(token.is_name or token.kind is TokenKind.LITERAL for token in rest):
                column = first.value if first.quoted else first.text
                if prefixed:
                    tags.append(FeatureTag.INDEX_PREFIX_LENGTH)
        if column is None:
            tags.append(FeatureTag.EXPRESSION_INDEX)
        return IndexElement(first.position, tuple(dict.fromkeys(tags)), expression=text, column=column)

    def _create_view(self, rule: GrammarRule) -> None:
        self._if_not_exists()
        self.name = self._qualified_name("view name")
        if self._at("("):
            self._key_columns([])
        self._expect("AS")
        self.flags.add(StatementFlag.AS_QUERY)
        self._scan_tail()

    # ALTER / DROP -----------------------------------------------------
    def _alter_table(self, rule: GrammarRule) -> None:
        self._if_exists()
        self._accept("ONLY")
        self.name = self._qualified_name("table name")
        actions = 0
        while True:
            start = self._peek()
            action = self._take("alter_actions")
            if action is None:
                raise self._error("ALTER TABLE action")
            self._alter_action(action, start)
            actions += 1
            if not self._at(","):
                break
            if not self.grammar.multi_action_alter:
                raise self._error("end of statement (one action per ALTER TABLE)")
            self.pos += 1
        if not self._at_end():
            raise self._error("',' or end of statement")
        if actions > 1:
            self.tags.append(FeatureTag.MULTI_ACTION_ALTER)

    def _alter_action(self, rule: GrammarRule, start: Token) -> None:
        tags = [rule.tag] if rule.tag else []
        production = rule.production
        slot = len(self.children)
        label, target = rule.text, None
        if production is Production.ALTER_ADD and self._match("table_elements") is not None:
            label = "ADD CONSTRAINT"
            self._table_element()
        elif production in (Production.ALTER_ADD, Production.ALTER_ADD_COLUMN):
            label = "ADD COLUMN"
            self._accept("IF", "NOT", "EXISTS")
            target = self._column_definition().name
        elif production is Production.ALTER_DROP_COLUMN:
            if self._at(*_DROP_TARGETS):
                label = f"DROP {self._peek().text.upper()}"
                self._skip_clause(tags)
            else:
                label = "DROP COLUMN"
                self._accept("IF", "EXISTS")
                target = self._name("column name")
                self._accept("CASCADE") or self._accept("RESTRICT")
        elif production is Production.ALTER_DROP_CONSTRAINT:
            self._accept("IF", "EXISTS")
            target = self._name("constraint name")
            self._accept("CASCADE") or self._accept("RESTRICT")
        elif production is Production.ALTER_RENAME_COLUMN:
            old = self._name("column name")
            self._expect("TO")
            target = f"{old} TO {self._name('column name')}"
        elif production is Production.ALTER_RENAME_TABLE:
            target = str(self._qualified_name("table name", tags))
        elif production is Production.ALTER_COLUMN:
            label = "ALTER COLUMN"
            target = self._name("column name")
            self._skip_clause(tags)
        elif production is Production.ALTER_MODIFY:
            label = "MODIFY COLUMN"
            target = self._column_definition().name
        elif production is Production.ALTER_CHANGE:
            label = "CHANGE COLUMN"
            old = self._name("column name")
            target = f"{old} TO {self._column_definition().name}"
        else:
            raise ParseError(start.position, "ALTER TABLE action", start.text)
        action = AlterAction(start.position, tuple(dict.fromkeys(tags)), action=label, target=target)
        self.children.insert(slot, action)

    def _drop(self, rule: GrammarRule) -> None:
        self._if_exists()
        self.name = self._qualified_name("object name")
        while self._at(","):
            self.pos += 1
            self._qualified_name("object name")
        if rule.production is Production.DROP_INDEX and self._accept("ON"):
            self.target = self._qualified_name("table name")
        self._accept("CASCADE") or self._accept("RESTRICT")
        if not self._at_end():
            raise self._error("end of statement")

    # DML --------------------------------------------------------------
    def _dml(self, rule: GrammarRule) -> None:
        self._accept("ONLY")
        self.target = self._qualified_name("table name")
        self._scan_tail()

    def _select(self, rule: GrammarRule) -> None:
        self._scan_tail()

import pytest

from infix_tree.parser.ast_builder import Grouped, Leaf, Operator, Placeholder, count_nodes
from infix_tree.parser.infix_parser import MalformedExpression, Parser, needs_placeholder, parse_tokens
from infix_tree.parser.priority import PriorityTable


def parse(text, operators):
    return Parser(operators).parse(text.split())


def test_later_operator_binds_tighter():
    tree = parse('1 + 2 * 3', ['+', '*'])
    assert tree == Operator('+', Leaf('1'), Operator('*', Leaf('2'), Leaf('3')))


def test_leading_operator_gets_placeholder():
    tree = parse('- 1 * 2 + 3', ['+', '-', '*'])
    assert tree == Operator(
        '+',
        Operator('-', Placeholder(), Operator('*', Leaf('1'), Leaf('2'))),
        Leaf('3'),
    )


def test_trailing_operator_gets_placeholder():
    tree = parse('1 + 2 * 3 ?', ['+', '?', '*'])
    assert tree == Operator(
        '+',
        Leaf('1'),
        Operator('?', Operator('*', Leaf('2'), Leaf('3')), Placeholder()),
    )


def test_parentheses_group():
    tree = parse('( 1 + 2 ) * 3', ['+', '*'])
    assert tree == Operator('*', Grouped(Operator('+', Leaf('1'), Leaf('2'))), Leaf('3'))


def test_placeholder_after_open_group():
    tree = parse('( - 1 ) * 2 + 3', ['+', '-', '*'])
    assert tree == Operator(
        '+',
        Operator('*', Grouped(Operator('-', Placeholder(), Leaf('1'))), Leaf('2')),
        Leaf('3'),
    )


def test_placeholder_before_close_group():
    tree = parse('1 + 2 * ( 3 ? )', ['+', '?', '*'])
    assert tree == Operator(
        '+',
        Leaf('1'),
        Operator('*', Leaf('2'), Grouped(Operator('?', Leaf('3'), Placeholder()))),
    )


def test_adjacent_operands_are_malformed():
    with pytest.raises(MalformedExpression):
        parse('p q * r s', ['*'])


def test_equal_rank_is_left_associative():
    tree = parse('a - b - c', ['-'])
    assert tree == Operator('-', Operator('-', Leaf('a'), Leaf('b')), Leaf('c'))


def test_single_operand():
    assert parse('x', ['+']) == Leaf('x')


def test_empty_table_makes_every_token_an_operand():
    assert parse('+', []) == Leaf('+')
    with pytest.raises(MalformedExpression):
        parse('1 + 2', [])


def test_lone_operator_gets_two_placeholders():
    assert parse('+', ['+']) == Operator('+', Placeholder(), Placeholder())


def test_consecutive_operators_get_placeholder_between():
    tree = parse('1 + * 2', ['+', '*'])
    assert tree == Operator('+', Leaf('1'), Operator('*', Placeholder(), Leaf('2')))


def test_empty_group_holds_placeholder():
    assert parse('( )', ['+']) == Grouped(Placeholder())


def test_nested_groups():
    tree = parse('( ( a ) )', ['+'])
    assert tree == Grouped(Grouped(Leaf('a')))


def test_group_blocks_outer_reduction():
    tree = parse('a * ( b + c ) * d', ['+', '*'])
    assert tree == Operator(
        '*',
        Operator('*', Leaf('a'), Grouped(Operator('+', Leaf('b'), Leaf('c')))),
        Leaf('d'),
    )


def test_empty_input_is_malformed():
    with pytest.raises(MalformedExpression):
        Parser(['+']).parse([])


def test_empty_input_has_no_optional_tree():
    assert Parser(['+']).try_parse([]) is None
    assert Parser([]).try_parse(iter(())) is None


@pytest.mark.parametrize('text', [
    '( 1 + 2',
    '1 + 2 )',
    ')',
    '( 1 2 )',
    '1 ( 2 )',
    'a b',
])
def test_malformed_inputs(text):
    with pytest.raises(MalformedExpression):
        parse(text, ['+', '*'])


def test_unmatched_open_reason():
    with pytest.raises(MalformedExpression) as exc:
        parse('( 1', ['+'])
    assert 'unmatched "("' in exc.value.reason


def test_unmatched_close_reason():
    with pytest.raises(MalformedExpression) as exc:
        parse('1 )', ['+'])
    assert 'unmatched ")"' in exc.value.reason


def test_malformed_expression_is_value_error():
    assert issubclass(MalformedExpression, ValueError)


def test_try_parse_returns_none_on_failure():
    parser = Parser(['*'])
    assert parser.try_parse('p q * r s'.split()) is None
    assert parser.try_parse(['p', '*', 'q']) == Operator('*', Leaf('p'), Leaf('q'))


def test_parser_is_reusable_after_failure():
    parser = Parser(['+', '*'])
    with pytest.raises(MalformedExpression):
        parser.parse('( 1 + 2'.split())
    fresh = Parser(['+', '*']).parse('1 + 2 * 3'.split())
    assert parser.parse('1 + 2 * 3'.split()) == fresh


def test_fresh_parsers_agree():
    tokens = '( - 1 ) * 2 + 3 ?'.split()
    first = Parser(['+', '?', '-', '*']).parse(tokens)
    second = Parser(['+', '?', '-', '*']).parse(tokens)
    assert first == second


def test_accepts_any_iterable_of_tokens():
    tree = Parser(['+']).parse(iter(['1', '+', '2']))
    assert tree == Operator('+', Leaf('1'), Leaf('2'))


def test_parse_tokens_helper():
    assert parse_tokens(['a', '+', 'b'], ['+']) == Operator('+', Leaf('a'), Leaf('b'))


@pytest.mark.parametrize('text', [
    '1 + 2 * 3',
    '- 1 * 2 + 3',
    '1 + 2 * 3 ?',
    '( 1 + 2 ) * 3',
    '( - 1 ) * 2 + 3',
    '1 + 2 * ( 3 ? )',
    '+ + +',
    '( ( - ) ) ?',
    'a * ( b + ( c - d ) ) - e',
    '? ( )',
])
def test_operator_and_leaf_counts(text):
    operators = ['+', '?', '-', '*']
    tokens = text.split()
    counts = count_nodes(Parser(operators).parse(tokens))
    n_operator_tokens = sum(1 for t in tokens if t in operators)
    assert counts['Operator'] == n_operator_tokens
    assert counts['Leaf'] + counts['Placeholder'] == counts['Operator'] + 1


class TestNeedsPlaceholder:
    table = PriorityTable(['+', '*'])

    def test_start_and_end(self):
        assert needs_placeholder(self.table, None, None)

    def test_start_then_operator(self):
        assert needs_placeholder(self.table, None, '+')

    def test_operator_then_end(self):
        assert needs_placeholder(self.table, '*', None)

    def test_open_then_close(self):
        assert needs_placeholder(self.table, '(', ')')

    def test_operator_then_operator(self):
        assert needs_placeholder(self.table, '+', '*')

    def test_operand_on_either_side(self):
        assert not needs_placeholder(self.table, '1', '+')
        assert not needs_placeholder(self.table, '+', '1')
        assert not needs_placeholder(self.table, ')', '+')
        assert not needs_placeholder(self.table, '+', '(')

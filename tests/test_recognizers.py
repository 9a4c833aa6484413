"""Tests for the syntax pattern recognizers."""

import re

from js_constraint_extractor.generators import ValueGenerator
from js_constraint_extractor.recognizers import (
    FunctionContext,
    directory_read,
    equality_comparison,
    file_content_read,
    filler_length,
    negated_property,
    parse_int,
    relational_comparison,
    substring_comparison,
    to_number,
)
from js_constraint_extractor.syntax import Identifier, JavaScriptParser, walk


class RecognizerTest:
    parser = JavaScriptParser()

    def given_function(self, source):
        self.parsed = self.parser.parse(source)
        func = self.parsed.root.body[0]
        self.context = FunctionContext(
            name=func.id.name,
            params=[p.name for p in func.params if isinstance(p, Identifier)],
            arity=len(func.params),
            source=self.parsed,
            generator=ValueGenerator(seed=7),
        )
        self.nodes = []
        walk(func.body, self.nodes.append)

    def when_recognizer_runs(self, recognizer):
        self.constraints = [
            c for node in self.nodes for c in recognizer(node, self.context)
        ]

    def then_values_are(self, *values):
        assert [c.value for c in self.constraints] == list(values)

    def then_kinds_are(self, *kinds):
        assert [c.kind for c in self.constraints] == list(kinds)

    def then_all_constraints_are_on(self, ident):
        assert self.constraints
        assert all(c.ident == ident for c in self.constraints)

    def then_nothing_is_found(self):
        assert self.constraints == []


class TestNegatedProperty(RecognizerTest):
    def test_emits_truthy_object_and_false(self):
        """`!opts.verbose` suggests an object with the property set and false."""
        self.given_function("function f(opts) { if (!opts.verbose) { return 1; } }")
        self.when_recognizer_runs(negated_property)
        self.then_all_constraints_are_on("opts")
        self.then_values_are("opts = {'verbose': true}", "false")
        self.then_kinds_are("string", "string")
        assert all(c.operator == "!" for c in self.constraints)
        assert self.constraints[0].expression == "!opts.verbose"
        assert self.constraints[0].func_name == "f"

    def test_ignores_non_parameter_objects(self):
        """Negating a property of a local is not a parameter constraint."""
        self.given_function("function f(opts) { var o = {}; return !o.verbose; }")
        self.when_recognizer_runs(negated_property)
        self.then_nothing_is_found()

    def test_ignores_other_unary_operators(self):
        """Only logical negation is recognized."""
        self.given_function("function f(opts) { return typeof opts.verbose; }")
        self.when_recognizer_runs(negated_property)
        self.then_nothing_is_found()

    def test_ignores_negated_parameter_without_property(self):
        """`!opts` has no member access to satisfy."""
        self.given_function("function f(opts) { return !opts; }")
        self.when_recognizer_runs(negated_property)
        self.then_nothing_is_found()


class TestFileContentRead(RecognizerTest):
    def test_emits_three_file_fixtures_in_order(self):
        """readFileSync(p) suggests content, a directory and a plain file."""
        self.given_function("function f(p) { return fs.readFileSync(p, 'utf8'); }")
        self.when_recognizer_runs(file_content_read)
        self.then_all_constraints_are_on("p")
        self.then_kinds_are("fileWithContent", "fileWithContent", "fileExists")
        self.then_values_are("'pathContent/file1'", "'pathContent/someDir'", "'file'")
        assert self.constraints[0].operator == ""
        assert self.constraints[0].expression == "fs.readFileSync(p, 'utf8')"

    def test_plain_function_callee(self):
        """`fs_readFileSync(p)` is a file read too."""
        self.given_function("function f(p){ fs_readFileSync(p) }")
        self.when_recognizer_runs(file_content_read)
        self.then_all_constraints_are_on("p")
        self.then_kinds_are("fileWithContent", "fileWithContent", "fileExists")
        assert self.constraints[0].expression == "fs_readFileSync(p)"

    def test_ignores_unrelated_plain_function(self):
        self.given_function("function f(p){ readFileSyncLater(p) }")
        self.when_recognizer_runs(file_content_read)
        self.then_nothing_is_found()

    def test_skips_call_without_arguments(self):
        """A call with no arguments is a mismatch, not an error."""
        self.given_function("function f(p) { return fs.readFileSync(); }")
        self.when_recognizer_runs(file_content_read)
        self.then_nothing_is_found()

    def test_skips_non_parameter_argument(self):
        """Reading a path that is not a parameter is ignored."""
        self.given_function("function f(p) { return fs.readFileSync('/etc/hosts'); }")
        self.when_recognizer_runs(file_content_read)
        self.then_nothing_is_found()


class TestDirectoryRead(RecognizerTest):
    def test_emits_empty_and_non_empty_directory(self):
        """readdirSync(p) suggests two distinct directory fixtures."""
        self.given_function("function f(p) { return fs.readdirSync(p); }")
        self.when_recognizer_runs(directory_read)
        self.then_all_constraints_are_on("p")
        self.then_kinds_are("fileExists", "fileExists")
        self.then_values_are("'emptyDir'", "'nonEmptyDir'")

    def test_plain_function_callee(self):
        """`fs_readdirSync(p)` is a directory read too."""
        self.given_function("function f(p){ fs_readdirSync(p) }")
        self.when_recognizer_runs(directory_read)
        self.then_all_constraints_are_on("p")
        self.then_values_are("'emptyDir'", "'nonEmptyDir'")

    def test_ignores_file_reads(self):
        """readFileSync is not a directory read."""
        self.given_function("function f(p) { return fs.readFileSync(p); }")
        self.when_recognizer_runs(directory_read)
        self.then_nothing_is_found()


class TestEqualityComparison(RecognizerTest):
    def test_numeric_comparison_on_parameter(self):
        """`age == 30` suggests the literal text and NaN."""
        self.given_function("function f(age) { if (age == 30) { return 1; } }")
        self.when_recognizer_runs(equality_comparison)
        self.then_all_constraints_are_on("age")
        self.then_kinds_are("integer", "integer")
        self.then_values_are("30", "NaN")
        assert self.constraints[0].expression == "age == 30"
        assert self.constraints[0].operator == "=="

    def test_string_comparison_on_parameter(self):
        """A quoted right-hand side gets a NEQ sentinel of its inner text."""
        self.given_function("function f(mode, n) { return mode !== 'fast'; }")
        self.when_recognizer_runs(equality_comparison)
        self.then_all_constraints_are_on("mode")
        self.then_values_are("'fast'", "'NEQ - fast'")
        self.then_kinds_are("integer", "integer")

    def test_single_parameter_fallback_splices_area_code(self):
        """A local compared to "555" maps onto the only parameter."""
        self.given_function(
            'function f(x) { var y = x.trim(); if (y == "555") { return 1; } }'
        )
        self.when_recognizer_runs(equality_comparison)
        self.then_all_constraints_are_on("x")
        self.then_kinds_are("string", "string")
        assert self.constraints[0].value == "'NEQ - \"555\"'"
        assert re.fullmatch(r'"555\d{7}"', self.constraints[1].value)

    def test_single_parameter_fallback_without_string(self):
        """A non-string right-hand side yields ten random digits."""
        self.given_function("function f(x) { var y = 1; return y === 7; }")
        self.when_recognizer_runs(equality_comparison)
        self.then_all_constraints_are_on("x")
        assert self.constraints[0].value == "'NEQ - 7'"
        assert re.fullmatch(r'"\d{10}"', self.constraints[1].value)

    def test_single_parameter_fallback_keeps_number_numeric(self):
        """Letters in the compared literal are not spliced into the number."""
        self.given_function('function f(x) { var y = x; return y == "ab"; }')
        self.when_recognizer_runs(equality_comparison)
        assert self.constraints[0].value == "'NEQ - \"ab\"'"
        assert re.fullmatch(r'"\d{10}"', self.constraints[1].value)

    def test_no_fallback_with_several_parameters(self):
        """Locals in multi-parameter functions are not attributed."""
        self.given_function('function f(a, b) { return y == "555"; }')
        self.when_recognizer_runs(equality_comparison)
        self.then_nothing_is_found()

    def test_no_fallback_when_other_parameters_are_destructured(self):
        """Arity counts every declared parameter, not only identifiers."""
        self.given_function('function f(a, {b}) { return y == "555"; }')
        self.when_recognizer_runs(equality_comparison)
        self.then_nothing_is_found()

    def test_ignores_relational_operators(self):
        """`<` belongs to the relational recognizer."""
        self.given_function("function f(a) { return a < 3; }")
        self.when_recognizer_runs(equality_comparison)
        self.then_nothing_is_found()


class TestRelationalComparison(RecognizerTest):
    def test_emits_one_below_and_one_above(self):
        """`n > 32` suggests 31 and 33."""
        self.given_function("function f(n) { if (n > 32) { return 1; } }")
        self.when_recognizer_runs(relational_comparison)
        self.then_all_constraints_are_on("n")
        self.then_values_are("31", "33")
        self.then_kinds_are("integer", "integer")

    def test_less_than_emits_the_same_shape(self):
        """`<` and `>` are probed identically."""
        self.given_function("function f(n) { return n < 32; }")
        self.when_recognizer_runs(relational_comparison)
        self.then_values_are("31", "33")
        assert self.constraints[0].operator == "<"

    def test_negative_and_hex_bounds(self):
        """Bounds follow JavaScript parseInt."""
        self.given_function("function f(n, m) { return n < -5 || m > 0x10; }")
        self.when_recognizer_runs(relational_comparison)
        self.then_values_are("-6", "-4", "15", "17")

    def test_skips_non_numeric_bound(self):
        """Comparing against another variable is not a numeric boundary."""
        self.given_function("function f(n, limit) { return n < limit; }")
        self.when_recognizer_runs(relational_comparison)
        self.then_nothing_is_found()

    def test_ignores_inclusive_operators(self):
        """Only strict `<` and `>` are recognized."""
        self.given_function("function f(n) { return n <= 3 || n >= 9; }")
        self.when_recognizer_runs(relational_comparison)
        self.then_nothing_is_found()


class TestSubstringComparison(RecognizerTest):
    def test_pads_token_to_the_compared_index(self):
        """`s.indexOf("@") == 3` suggests three filler characters then the token."""
        self.given_function('function f(s) { if (s.indexOf("@") == 3) { return s; } }')
        self.when_recognizer_runs(substring_comparison)
        self.then_all_constraints_are_on("s")
        self.then_values_are("'aaa@'")
        self.then_kinds_are("string")

    def test_negative_index_adds_no_padding(self):
        """`== -1` leaves the token alone."""
        self.given_function("function f(s) { return s.indexOf('x') == -1; }")
        self.when_recognizer_runs(substring_comparison)
        self.then_values_are("'x'")

    def test_non_numeric_right_hand_adds_no_padding(self):
        """Loose comparison with non-numeric text never runs the filler loop."""
        self.given_function("function f(s, pos) { return s.indexOf('x') === pos; }")
        self.when_recognizer_runs(substring_comparison)
        self.then_values_are("'x'")

    def test_fractional_index_rounds_up(self):
        """A counter below 2.5 runs three times."""
        self.given_function("function f(s) { return s.indexOf('x') == 2.5; }")
        self.when_recognizer_runs(substring_comparison)
        self.then_values_are("'aaax'")

    def test_numeric_token_is_written_as_javascript_prints_it(self):
        """`indexOf(1.0)` searches for "1"."""
        self.given_function("function f(s) { return s.indexOf(1.0) == 2; }")
        self.when_recognizer_runs(substring_comparison)
        self.then_values_are("'aa1'")

    def test_skips_non_literal_token(self):
        """The searched token must be a literal."""
        self.given_function("function f(s, t) { return s.indexOf(t) == 2; }")
        self.when_recognizer_runs(substring_comparison)
        self.then_nothing_is_found()

    def test_skips_call_without_arguments(self):
        """A call with no arguments is a mismatch, not an error."""
        self.given_function("function f(s) { return s.indexOf() == 2; }")
        self.when_recognizer_runs(substring_comparison)
        self.then_nothing_is_found()


class TestJavaScriptNumbers:
    def test_parse_int(self):
        assert parse_int("32") == 32
        assert parse_int("-5") == -5
        assert parse_int("0x1F") == 31
        assert parse_int("3.9") == 3
        assert parse_int("  7px") == 7
        assert parse_int("limit") is None
        assert parse_int("'12'") is None

    def test_to_number(self):
        assert to_number("3") == 3.0
        assert to_number("2.5") == 2.5
        assert to_number("1e2") == 100.0
        assert to_number("0x10") == 16.0
        assert to_number("") == 0.0
        assert to_number("-Infinity") == float("-inf")
        assert to_number("'3'") is None
        assert to_number("pos") is None

    def test_filler_length(self):
        assert filler_length("3") == 3
        assert filler_length("2.5") == 3
        assert filler_length("0") == 0
        assert filler_length("-1") == 0
        assert filler_length("Infinity") == 0
        assert filler_length("pos") == 0

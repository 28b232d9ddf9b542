"""Tests for compilation unit and declaration parsing."""

from rulelang.core.errors import ParseErrorKind


class TestPackageAndImports:
    """Tests for package, import and global statements."""

    def test_package_imports_and_globals(self, parse_ok):
        text = """
package com.acme;

import com.acme.Person;
import com.acme.model.*;
import function com.acme.Util.format;
global java.util.List results;
"""
        package = parse_ok(text)

        assert package.name == "com.acme"
        assert [i.target for i in package.imports] == ["com.acme.Person", "com.acme.model.*"]
        assert [i.target for i in package.function_imports] == ["com.acme.Util.format"]
        assert len(package.globals) == 1
        assert package.globals[0].type == "java.util.List"
        assert package.globals[0].identifier == "results"

    def test_semicolons_are_optional(self, parse_ok):
        package = parse_ok("package a.b\nimport x.Y\nglobal Z z\n")

        assert package.name == "a.b"
        assert package.imports[0].target == "x.Y"
        assert package.globals[0].identifier == "z"

    def test_import_offsets(self, parse_ok):
        text = "package p;\nimport com.acme.Person;\n"
        package = parse_ok(text)

        node = package.imports[0]
        assert node.span(text) == "import com.acme.Person;"
        assert node.line == 2
        assert node.column == 0

    def test_generic_and_array_global_types(self, parse_ok):
        package = parse_ok(
            "global Map<String, List<Integer>> cache;\nglobal String[] names;\n"
        )

        assert package.globals[0].type == "Map<String,List<Integer>>"
        assert package.globals[1].type == "String[]"

    def test_package_is_optional(self, parse_ok):
        package = parse_ok("rule R when then end")
        assert package.name == ""

    def test_keywords_usable_as_names(self, parse_ok):
        package = parse_ok("package rule.when;\nglobal Map end;\n")

        assert package.name == "rule.when"
        assert package.globals[0].identifier == "end"


class TestDuplicatePackage:
    def test_second_package_is_rejected(self, parse):
        result = parse("package a;\nrule R when then end\npackage b;\n")

        assert result.package.name == "a"
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.kind == ParseErrorKind.FAILED_PREDICATE
        assert "package name can only be declared once" in error.message
        assert error.line == 3


class TestFunctions:
    def test_typed_function(self, parse_ok):
        package = parse_ok('function String hello(String name) { return "Hello " + name; }')

        function = package.functions[0]
        assert function.name == "hello"
        assert function.return_type == "String"
        assert function.parameter_types == ["String"]
        assert function.parameter_names == ["name"]
        assert function.body == ' return "Hello " + name; '

    def test_untyped_function(self, parse_ok):
        package = parse_ok("function log(msg, level) {\n  System.out.println(msg);\n}")

        function = package.functions[0]
        assert function.return_type is None
        assert function.parameter_types == [None, None]
        assert function.parameter_names == ["msg", "level"]
        assert function.body == "\n  System.out.println(msg);\n"

    def test_nested_braces_and_array_parameters(self, parse_ok):
        text = "function int sum(int[] xs) { int t = 0; for (int x : xs) { t += x; } return t; }"
        function = parse_ok(text).functions[0]

        assert function.parameter_types == ["int[]"]
        assert function.body == " int t = 0; for (int x : xs) { t += x; } return t; "
        assert function.span(text) == text

    def test_dialect_from_package_attribute(self, parse_ok):
        package = parse_ok('dialect "mvel"\nfunction f() { }')
        assert package.functions[0].dialect == "mvel"


class TestTemplates:
    def test_template_slots(self, parse_ok):
        package = parse_ok("template Cheese\n  String name;\n  int price;\nend\n")

        template = package.templates[0]
        assert template.name == "Cheese"
        assert [(f.class_type, f.name) for f in template.fields] == [
            ("String", "name"),
            ("int", "price"),
        ]

    def test_template_without_slots(self, parse):
        result = parse("template Empty end\nrule R when then end")

        assert result.package.templates == []
        assert result.package.rule_names == ["R"]
        assert [e.kind for e in result.errors] == [ParseErrorKind.EARLY_EXIT]


class TestCompilationUnit:
    def test_empty_input(self, parse):
        result = parse("")

        assert [e.kind for e in result.errors] == [ParseErrorKind.EARLY_EXIT]

    def test_package_only_needs_a_statement(self, parse):
        result = parse("package a;")

        assert result.package.name == "a"
        assert [e.kind for e in result.errors] == [ParseErrorKind.EARLY_EXIT]

    def test_unknown_statement_is_skipped(self, parse):
        result = parse("package a;\n}\nrule R when then end\n")

        assert result.package.rule_names == ["R"]
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.kind == ParseErrorKind.NO_VIABLE_ALTERNATIVE
        assert error.message == "no viable alternative at input '}' in statement"
        assert (error.line, error.column) == (2, 0)

    def test_package_location(self, parse_ok):
        text = "  package a;\nrule R when then end"
        package = parse_ok(text)

        assert package.start_offset == 2
        assert package.end_offset == len(text)

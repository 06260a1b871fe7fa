"""Tests for the per-node printing rules."""

from __future__ import annotations

import pytest

from solfmt.errors import AstLoadError, InvalidVersionRange
from solfmt.source import Span
from tests.helpers import (
    contract,
    elementary,
    fmt,
    fmt_node,
    function,
    ident,
    node,
    number,
    span_of,
    state_variable,
    unit,
    variable,
)


def pragma(value: str, **fields) -> dict:
    return node("PragmaDirective", name="solidity", value=value, **fields)


def call(name: str, *args: dict) -> dict:
    return node("FunctionCall", expression=ident(name), arguments=list(args), names=[])


def binary(operator: str, left: dict, right: dict) -> dict:
    return node("BinaryOperation", operator=operator, left=left, right=right)


def statement(expression: dict) -> dict:
    return node("ExpressionStatement", expression=expression)


def block(*statements: dict) -> dict:
    return node("Block", statements=list(statements))


def asm_call(name: str, *args: dict) -> dict:
    return node("AssemblyCall", functionName=name, arguments=list(args))


def asm_block(*operations: dict) -> dict:
    return node("AssemblyBlock", operations=list(operations))


def decimal(value: str) -> dict:
    return node("DecimalNumber", value=value)


class TestPragma:
    def test_version_range(self):
        assert fmt(unit(pragma(">=0.4.22 <0.9.0"))) == "pragma solidity >=0.4.22 <0.9.0;\n"

    def test_version_range_is_stable(self):
        once = fmt(unit(pragma(">=0.4.22<0.9.0")))
        assert once == "pragma solidity >=0.4.22 <0.9.0;\n"
        assert fmt(unit(pragma(">=0.4.22 <0.9.0"))) == once

    def test_caret_kept(self):
        assert fmt(unit(pragma("^0.8.0"))) == "pragma solidity ^0.8.0;\n"

    def test_hyphen_range_expanded(self):
        assert fmt(unit(pragma("0.8.0 - 0.8.4"))) == "pragma solidity >=0.8.0 <=0.8.4;\n"

    def test_experimental(self):
        ast = unit(node("PragmaDirective", name="experimental", value="ABIEncoderV2"))
        assert fmt(ast) == "pragma experimental ABIEncoderV2;\n"

    def test_invalid_range_points_at_directive(self):
        source = "pragma solidity foo bar;"
        ast = unit(pragma("foo bar", range=[0, len(source) - 1]))
        with pytest.raises(InvalidVersionRange) as exc_info:
            fmt(ast, source)
        assert exc_info.value.span == Span(0, len(source) - 1)
        assert exc_info.value.code == "E002"


class TestImports:
    def test_plain(self):
        ast = unit(node("ImportDirective", path="./Foo.sol", unitAlias=None, symbolAliases=None))
        assert fmt(ast) == 'import "./Foo.sol";\n'

    def test_unit_alias(self):
        ast = unit(node("ImportDirective", path="./Foo.sol", unitAlias="Foo", symbolAliases=None))
        assert fmt(ast) == 'import "./Foo.sol" as Foo;\n'

    def test_symbols(self):
        ast = unit(node(
            "ImportDirective", path="./Foo.sol", unitAlias=None,
            symbolAliases=[["A", None], ["B", "C"]],
        ))
        assert fmt(ast) == 'import {A, B as C} from "./Foo.sol";\n'

    def test_symbols_bracket_spacing(self):
        ast = unit(node(
            "ImportDirective", path="./Foo.sol", unitAlias=None, symbolAliases=[["A", None]],
        ))
        assert fmt(ast, bracket_spacing=True) == 'import { A } from "./Foo.sol";\n'

    def test_single_quote(self):
        ast = unit(node("ImportDirective", path="./Foo.sol", unitAlias=None, symbolAliases=None))
        assert fmt(ast, single_quote=True) == "import './Foo.sol';\n"


class TestContracts:
    def test_empty_contract(self):
        assert fmt(unit(contract("Foo"))) == "contract Foo {}\n"

    def test_kinds(self):
        assert fmt(unit(contract("I", kind="interface"))) == "interface I {}\n"
        assert fmt(unit(contract("L", kind="library"))) == "library L {}\n"
        assert fmt(unit(contract("C", kind="abstract"))) == "abstract contract C {}\n"

    def test_inheritance(self):
        base = node(
            "InheritanceSpecifier",
            baseName=node("UserDefinedTypeName", namePath="Ownable"),
            arguments=[],
        )
        assert fmt(unit(contract("A", baseContracts=[base]))) == "contract A is Ownable {}\n"

    def test_state_variable(self):
        assert fmt(unit(contract("Foo", state_variable("uint", "x")))) == (
            "contract Foo {\n    uint256 x;\n}\n"
        )

    def test_constant_with_value(self):
        member = node(
            "StateVariableDeclaration",
            variables=[variable(
                "uint", "MAX", isStateVar=True, visibility="public", isDeclaredConst=True,
            )],
            initialValue=number("10"),
        )
        assert fmt(unit(contract("Foo", member))) == (
            "contract Foo {\n    uint256 public constant MAX = 10;\n}\n"
        )

    def test_functions_separated_by_blank_line(self):
        ast = unit(contract("Foo", function("f"), function("g")))
        assert fmt(ast) == (
            "contract Foo {\n"
            "    function f() public {}\n"
            "\n"
            "    function g() public {}\n"
            "}\n"
        )

    def test_blank_lines_between_members_preserved(self):
        source = "contract A {\n    uint256 a;\n\n    uint256 b;\n    uint256 c;\n}\n"
        members = [
            state_variable("uint256", name, range=span_of(source, f"uint256 {name};"))
            for name in "abc"
        ]
        ast = unit(contract("A", *members, range=span_of(source, source.rstrip())))
        assert fmt(ast, source) == source

    def test_multiple_blank_lines_collapse(self):
        source = "contract A {\n    uint256 a;\n\n\n\n    uint256 b;\n}\n"
        members = [
            state_variable("uint256", name, range=span_of(source, f"uint256 {name};"))
            for name in "ab"
        ]
        ast = unit(contract("A", *members, range=span_of(source, source.rstrip())))
        assert fmt(ast, source) == "contract A {\n    uint256 a;\n\n    uint256 b;\n}\n"

    def test_contracts_separated_by_blank_line(self):
        assert fmt(unit(contract("A"), contract("B"))) == "contract A {}\n\ncontract B {}\n"


class TestDeclarations:
    def test_file_level_constant(self):
        ast = unit(node(
            "FileLevelConstant", typeName=elementary("uint"), name="X", initialValue=number("1"),
        ))
        assert fmt(ast) == "uint256 constant X = 1;\n"

    def test_struct(self):
        struct = node(
            "StructDefinition", name="S", members=[variable("uint", "a"), variable("address", "b")],
        )
        assert fmt_node(struct) == "struct S {\n    uint256 a;\n    address b;\n}"

    def test_enum(self):
        enum = node(
            "EnumDefinition", name="E",
            members=[node("EnumValue", name="A"), node("EnumValue", name="B")],
        )
        assert fmt_node(enum) == "enum E {A, B}"

    def test_empty_enum(self):
        assert fmt_node(node("EnumDefinition", name="E", members=[])) == "enum E {}"

    def test_event(self):
        event = node(
            "EventDefinition", name="Transfer", isAnonymous=False,
            parameters=[variable("address", "from", isIndexed=True), variable("uint", "value")],
        )
        assert fmt_node(event) == "event Transfer(address indexed from, uint256 value);"

    def test_custom_error(self):
        error = node("CustomErrorDefinition", name="Unauthorized",
                     parameters=[variable("address", "caller")])
        assert fmt_node(error) == "error Unauthorized(address caller);"

    def test_user_defined_value_type(self):
        definition = node("TypeDefinition", name="Price", definition=elementary("uint128"))
        assert fmt_node(definition) == "type Price is uint128;"

    def test_using_for(self):
        using = node(
            "UsingForDeclaration", libraryName="SafeMath", functions=[],
            typeName=elementary("uint"), isGlobal=False,
        )
        assert fmt_node(using) == "using SafeMath for uint256;"

    def test_using_functions_for_any_type(self):
        using = node(
            "UsingForDeclaration", libraryName=None, functions=["add", "sub"],
            typeName=None, isGlobal=False,
        )
        assert fmt_node(using) == "using {add, sub} for *;"

    def test_modifier_definition(self):
        modifier = node(
            "ModifierDefinition", name="onlyOwner", parameters=None, isVirtual=False,
            override=None, body=block(statement(ident("_"))),
        )
        assert fmt_node(modifier) == "modifier onlyOwner {\n    _;\n}"


class TestFunctions:
    def test_signature_on_one_line(self):
        f = function(
            "f",
            parameters=[variable("uint", "a"), variable("address", "b")],
            returnParameters=[variable("bool", "")],
            visibility="external",
            stateMutability="view",
            body=[node("ReturnStatement", expression=node("BooleanLiteral", value=True))],
        )
        assert fmt_node(f) == (
            "function f(uint256 a, address b) external view returns (bool) {\n"
            "    return true;\n"
            "}"
        )

    def test_long_signature_breaks(self):
        f = function(
            "transfer",
            parameters=[variable("address", "recipient"), variable("uint", "amount")],
            returnParameters=[variable("bool", "")],
        )
        assert fmt_node(f, print_width=40) == (
            "function transfer(\n"
            "    address recipient,\n"
            "    uint256 amount\n"
            ")\n"
            "    public\n"
            "    returns (bool)\n"
            "{}"
        )

    def test_modifier_invocation(self):
        f = function("f", modifiers=[
            node("ModifierInvocation", name="onlyOwner", arguments=None),
            node("ModifierInvocation", name="only", arguments=[ident("admin")]),
        ])
        assert fmt_node(f) == "function f() public onlyOwner only(admin) {}"

    def test_virtual_override(self):
        f = function("f", isVirtual=True, override=[])
        assert fmt_node(f) == "function f() public virtual override {}"

    def test_override_list(self):
        bases = [node("UserDefinedTypeName", namePath=n) for n in ("A", "B")]
        f = function("f", override=bases)
        assert fmt_node(f) == "function f() public override(A, B) {}"

    def test_constructor(self):
        f = function("", isConstructor=True, visibility="default")
        assert fmt_node(f) == "constructor() {}"

    def test_fallback_and_receive(self):
        fallback = function("", isFallback=True, visibility="external")
        receive = function("", isReceiveEther=True, visibility="external",
                           stateMutability="payable")
        assert fmt_node(fallback) == "fallback() external {}"
        assert fmt_node(receive) == "receive() external payable {}"

    def test_declaration_without_body(self):
        f = function("f", visibility="external", bodyless=True)
        assert fmt_node(f) == "function f() external;"


class TestTypeNames:
    def test_explicit_types_always(self):
        assert fmt_node(variable("uint", "x")) == "uint256 x"
        assert fmt_node(variable("ufixed", "y")) == "ufixed128x18 y"

    def test_explicit_types_never(self):
        assert fmt_node(variable("uint256", "x"), explicit_types="never") == "uint x"

    def test_explicit_types_preserve(self):
        assert fmt_node(variable("uint", "x"), explicit_types="preserve") == "uint x"
        assert fmt_node(variable("int256", "x"), explicit_types="preserve") == "int256 x"

    def test_address_payable(self):
        payable = node("ElementaryTypeName", name="address", stateMutability="payable")
        assert fmt_node(payable) == "address payable"

    def test_storage_location(self):
        assert fmt_node(variable("bytes", "data", storageLocation="calldata")) == "bytes calldata data"

    def test_mapping(self):
        mapping = node("Mapping", keyType=elementary("address"), valueType=elementary("uint"))
        assert fmt_node(mapping) == "mapping(address => uint256)"

    def test_array(self):
        array = node("ArrayTypeName", baseTypeName=elementary("uint"), length=number("3"))
        assert fmt_node(array) == "uint256[3]"

    def test_function_type(self):
        fn = node(
            "FunctionTypeName", parameterTypes=[variable("uint", "")],
            returnTypes=[variable("bool", "")], visibility="external", stateMutability="view",
        )
        assert fmt_node(fn) == "function(uint256) external view returns (bool)"


class TestStatements:
    def test_if_else_if(self):
        stmt = node(
            "IfStatement",
            condition=ident("a"),
            trueBody=block(statement(ident("x"))),
            falseBody=node(
                "IfStatement", condition=ident("b"),
                trueBody=block(statement(ident("y"))), falseBody=None,
            ),
        )
        assert fmt_node(stmt) == "if (a) {\n    x;\n} else if (b) {\n    y;\n}"

    def test_if_without_block(self):
        stmt = node(
            "IfStatement", condition=ident("a"),
            trueBody=node("ReturnStatement", expression=None), falseBody=None,
        )
        assert fmt_node(stmt) == "if (a) return;"

    def test_for_header_drops_inner_semicolons(self):
        init = node(
            "VariableDeclarationStatement",
            variables=[variable("uint", "i")],
            initialValue=number("0"),
        )
        loop = statement(node(
            "UnaryOperation", operator="++", isPrefix=False, subExpression=ident("i"),
        ))
        stmt = node(
            "ForStatement",
            initExpression=init,
            conditionExpression=binary("<", ident("i"), number("10")),
            loopExpression=loop,
            body=block(),
        )
        assert fmt_node(stmt) == "for (uint256 i = 0; i < 10; i++) {}"

    def test_infinite_for(self):
        stmt = node(
            "ForStatement", initExpression=None, conditionExpression=None,
            loopExpression=None, body=block(),
        )
        assert fmt_node(stmt) == "for (;;) {}"

    def test_while_and_do_while(self):
        cond = binary("<", ident("i"), number("10"))
        assert fmt_node(node("WhileStatement", condition=cond, body=block())) == (
            "while (i < 10) {}"
        )
        assert fmt_node(node("DoWhileStatement", condition=ident("x"), body=block())) == (
            "do {} while (x);"
        )

    def test_emit_and_revert(self):
        emit = node("EmitStatement", eventCall=call("Transfer", ident("a")))
        revert = node("RevertStatement", revertCall=call("Unauthorized"))
        assert fmt_node(emit) == "emit Transfer(a);"
        assert fmt_node(revert) == "revert Unauthorized();"

    def test_simple_statements(self):
        assert fmt_node(node("BreakStatement")) == "break;"
        assert fmt_node(node("ContinueStatement")) == "continue;"
        assert fmt_node(node("ThrowStatement")) == "throw;"
        assert fmt_node(node("UncheckedStatement", block=block())) == "unchecked {}"

    def test_tuple_declaration_with_gap(self):
        stmt = node(
            "VariableDeclarationStatement",
            variables=[variable("uint", "a"), None],
            initialValue=call("f"),
        )
        assert fmt_node(stmt) == "(uint256 a, ) = f();"

    def test_try_catch(self):
        target = node("MemberAccess", expression=ident("c"), memberName="f")
        stmt = node(
            "TryStatement",
            expression=node("FunctionCall", expression=target, arguments=[], names=[]),
            returnParameters=[variable("uint", "v")],
            body=block(),
            catchClauses=[
                node("CatchClause", kind="Error", body=block(),
                     parameters=[variable("string", "reason", storageLocation="memory")]),
                node("CatchClause", kind=None, parameters=None, body=block()),
            ],
        )
        assert fmt_node(stmt) == (
            "try c.f() returns (uint256 v) {} catch Error(string memory reason) {} catch {}"
        )


class TestExpressions:
    def test_binary_chain_is_flat(self):
        expr = binary("+", ident("a"), binary("*", ident("b"), ident("c")))
        assert fmt_node(expr) == "a + b * c"

    def test_assignment(self):
        expr = binary("=", ident("x"), binary("+", ident("y"), number("1")))
        assert fmt_node(statement(expr)) == "x = y + 1;"

    def test_compound_assignment(self):
        assert fmt_node(statement(binary("+=", ident("x"), number("1")))) == "x += 1;"

    def test_conditional(self):
        expr = node(
            "Conditional", condition=ident("a"),
            trueExpression=ident("b"), falseExpression=ident("c"),
        )
        assert fmt_node(expr) == "a ? b : c"

    def test_unary(self):
        def unary(op, sub, prefix=True):
            return node("UnaryOperation", operator=op, subExpression=sub, isPrefix=prefix)

        assert fmt_node(unary("!", ident("x"))) == "!x"
        assert fmt_node(unary("-", unary("-", ident("x")))) == "- -x"
        assert fmt_node(unary("delete", ident("x"))) == "delete x"
        assert fmt_node(unary("--", ident("i"), prefix=False)) == "i--"

    def test_call_arguments_break(self):
        expr = call("foo", ident("aaaa"), ident("bbbb"))
        assert fmt_node(expr) == "foo(aaaa, bbbb)"
        assert fmt_node(expr, print_width=10) == "foo(\n    aaaa,\n    bbbb\n)"

    def test_named_arguments(self):
        expr = node("FunctionCall", expression=ident("f"), arguments=[number("1")], names=["a"])
        assert fmt_node(expr) == "f({a: 1})"

    def test_call_options(self):
        options = node("NameValueList", names=["value"], arguments=[number("1")])
        expr = node("NameValueExpression", expression=ident("foo"), arguments=options)
        assert fmt_node(expr) == "foo{value: 1}"

    def test_access(self):
        assert fmt_node(node("MemberAccess", expression=ident("a"), memberName="b")) == "a.b"
        assert fmt_node(node("IndexAccess", base=ident("a"), index=number("0"))) == "a[0]"
        rng = node("IndexRangeAccess", base=ident("a"), indexStart=number("1"), indexEnd=None)
        assert fmt_node(rng) == "a[1:]"

    def test_tuples(self):
        pair = node("TupleExpression", components=[ident("a"), ident("b")], isArray=False)
        array = node("TupleExpression", components=[number("1"), number("2")], isArray=True)
        assert fmt_node(pair) == "(a, b)"
        assert fmt_node(array) == "[1, 2]"

    def test_new(self):
        expr = node("NewExpression", typeName=node("UserDefinedTypeName", namePath="Foo"))
        assert fmt_node(expr) == "new Foo"


class TestLiterals:
    def test_string_fragments_keep_prefixes(self):
        literal = node(
            "StringLiteral", value="abcdef", parts=["abc", "def"], isUnicode=[False, True],
        )
        assert fmt_node(literal) == '"abc" unicode"def"'

    def test_single_unicode_flag_applies_to_all_fragments(self):
        literal = node("StringLiteral", value="ab", parts=["a", "b"], isUnicode=True)
        assert fmt_node(literal) == 'unicode"a" unicode"b"'

    def test_fragments_break_when_too_wide(self):
        literal = node(
            "StringLiteral", value="aaaabbbb", parts=["aaaa", "bbbb"], isUnicode=[False, False],
        )
        assert fmt_node(literal, print_width=8) == '"aaaa"\n    "bbbb"'

    def test_fragment_flag_mismatch(self):
        literal = node("StringLiteral", value="ab", parts=["a", "b"], isUnicode=[False])
        with pytest.raises(AstLoadError):
            fmt_node(literal)

    def test_string_quotes_normalized(self):
        literal = node("StringLiteral", value="abc", parts=["abc"], isUnicode=[False])
        assert fmt_node(literal, single_quote=True) == "'abc'"

    def test_hex_literal(self):
        literal = node("HexLiteral", value="00ff", parts=["00ff", "aa"])
        assert fmt_node(literal) == 'hex"00ff" hex"aa"'

    def test_number_with_unit(self):
        assert fmt_node(node("NumberLiteral", number="1.50", subdenomination="ether")) == (
            "1.5 ether"
        )

    def test_boolean(self):
        assert fmt_node(node("BooleanLiteral", value=False)) == "false"


class TestAssembly:
    def test_switch_cases_on_separate_lines(self):
        switch = node(
            "AssemblySwitch",
            expression=asm_call("x"),
            cases=[
                node("AssemblyCase", value=decimal("0"), block=asm_block(), default=False),
                node("AssemblyCase", value=None, block=asm_block(), default=True),
            ],
        )
        assert fmt_node(switch, print_width=200) == "switch x\ncase 0 {}\ndefault {}"

    def test_inline_assembly(self):
        local = node(
            "AssemblyLocalDefinition",
            names=[ident("x")],
            expression=asm_call("add", decimal("1"), decimal("2")),
        )
        stmt = node("InlineAssemblyStatement", language=None, flags=[], body=asm_block(local))
        assert fmt_node(stmt) == "assembly {\n    let x := add(1, 2)\n}"

    def test_assembly_flags(self):
        stmt = node(
            "InlineAssemblyStatement", language=None, flags=['"memory-safe"'], body=asm_block(),
        )
        assert fmt_node(stmt) == 'assembly ("memory-safe") {}'

    def test_call_without_arguments_keeps_parentheses(self):
        source = "gas()"
        assert fmt_node(asm_call("gas") | {"range": [0, 4]}, source) == "gas()"
        assert fmt_node(asm_call("gas")) == "gas"

    def test_control_flow(self):
        assign = node("AssemblyAssignment", names=[ident("x")], expression=decimal("1"))
        cond = asm_call("lt", ident("i"), decimal("10"))
        assert fmt_node(assign) == "x := 1"
        assert fmt_node(node("AssemblyIf", condition=cond, body=asm_block())) == (
            "if lt(i, 10) {}"
        )
        loop = node(
            "AssemblyFor", pre=asm_block(), condition=cond, post=asm_block(), body=asm_block(),
        )
        assert fmt_node(loop) == "for {} lt(i, 10) {} {}"

    def test_function_definition(self):
        fn = node(
            "AssemblyFunctionDefinition", name="f", arguments=[ident("a"), ident("b")],
            returnArguments=[ident("r")], body=asm_block(node("Break"), node("Continue")),
        )
        assert fmt_node(fn) == "function f(a, b) -> r {\n    break\n    continue\n}"

    def test_member_access(self):
        access = node("AssemblyMemberAccess", expression=ident("x"), memberName=ident("slot"))
        assert fmt_node(access) == "x.slot"

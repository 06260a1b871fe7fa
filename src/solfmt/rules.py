"""Printing rules for every Solidity node type.

Each rule turns one node into a ``Doc``, printing children through the
context's ``print``/``print_each`` callbacks. Rules are registered by node
type in :data:`RULES`; the registry must cover
:data:`solfmt.ast_nodes.NODE_TYPES` exactly.

Layout follows prettier-plugin-solidity: four-space indentation, blocks
always broken, parameter and argument lists that break one item per line.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from solfmt.ast_nodes import Node
from solfmt.comments import print_dangling_comments
from solfmt.doc import Doc, group, hardline, indent, join, line, softline
from solfmt.errors import AstLoadError, InvalidVersionRange
from solfmt.numbers import print_number
from solfmt.source import is_next_line_empty
from solfmt.strings import print_string
from solfmt.version_range import normalize_pragma_value

if TYPE_CHECKING:
    from solfmt.printer import PrintContext

Rule = Callable[["PrintContext"], Doc]

RULES: dict[str, Rule] = {}

# Node types whose rules print their own dangling comments
DANGLING_OWNERS = frozenset({
    "SourceUnit",
    "ContractDefinition",
    "Block",
    "AssemblyBlock",
    "StructDefinition",
})

# Always separated from their neighbours by a blank line
_SPACED_MEMBERS = frozenset({
    "ContractDefinition",
    "FunctionDefinition",
    "ModifierDefinition",
})

_ASSIGNMENT_OPERATORS = frozenset({
    "=", "|=", "^=", "&=", "<<=", ">>=", "+=", "-=", "*=", "/=", "%=",
})

_EXPLICIT_TYPES = {
    "uint": "uint256",
    "int": "int256",
    "fixed": "fixed128x18",
    "ufixed": "ufixed128x18",
}
_IMPLICIT_TYPES = {v: k for k, v in _EXPLICIT_TYPES.items()}


def rule(*node_types: str) -> Callable[[Rule], Rule]:
    def register(fn: Rule) -> Rule:
        for node_type in node_types:
            RULES[node_type] = fn
        return fn
    return register


# ── Shared helpers ───────────────────────────────────────────────


def _separated_list(items: Sequence[Doc], *, edge: Doc = softline) -> list:
    return [indent([edge, join([",", line], items)]), edge]


def _print_parameters(ctx: PrintContext, slot: str) -> Doc:
    params = ctx.print_each(slot)
    if not params:
        return "()"
    return group(["(", *_separated_list(params), ")"])


def _bracket_edge(ctx: PrintContext) -> Doc:
    return line if ctx.options.bracket_spacing else softline


def _print_braces(ctx: PrintContext, items: Sequence[Doc]) -> Doc:
    return group(["{", *_separated_list(items, edge=_bracket_edge(ctx)), "}"])


def _print_name(ctx: PrintContext, slot: str) -> Doc:
    """Some parser versions give names as plain strings, others as nodes."""
    value = ctx.node.get(slot)
    if isinstance(value, Node):
        return ctx.print(slot)
    return value or ""


def _preserving_empty_lines(
    ctx: PrintContext,
    slot: str,
    *,
    spaced: frozenset[str] = frozenset(),
    suffix: str = "",
) -> list:
    """Children one per line, keeping single blank lines from the source."""
    nodes = ctx.node.get(slot) or ()
    parts: list = []
    for i, doc in enumerate(ctx.print_each(slot)):
        if i > 0:
            parts.append(hardline)
            prev, current = nodes[i - 1], nodes[i]
            if (
                prev.type in spaced
                or current.type in spaced
                or (prev.span is not None and is_next_line_empty(ctx.text, prev.span.end + 1))
            ):
                parts.append(hardline)
        parts.append([doc, suffix] if suffix else doc)
    return parts


def _block_body(
    ctx: PrintContext,
    slot: str,
    *,
    spaced: frozenset[str] = frozenset(),
    suffix: str = "",
) -> Doc:
    """The inside of ``{ ... }``: nothing when empty, else indented lines."""
    items = ctx.node.get(slot) or ()
    dangling = ctx.dangling_comments()
    if not items and not dangling:
        return ""
    contents: list = []
    if items:
        contents.append(_preserving_empty_lines(ctx, slot, spaced=spaced, suffix=suffix))
    if dangling:
        if items:
            contents.append(hardline)
        contents.append(print_dangling_comments(dangling, ctx.text))
    return [indent([hardline, contents]), hardline]


def _statement_body(ctx: PrintContext, slot: str) -> Doc:
    if ctx.node[slot].type == "Block":
        return [" ", ctx.print(slot)]
    return group(indent([line, ctx.print(slot)]))


def _print_condition(ctx: PrintContext, slot: str) -> Doc:
    return ["(", group([indent([softline, ctx.print(slot)]), softline]), ")"]


def _print_assignment(left: Doc, operator: str, right_node: Node | None, right: Doc) -> Doc:
    if right_node is not None and right_node.type in ("BinaryOperation", "Conditional"):
        return group([left, " ", operator, group(indent([line, right]))])
    return [left, " ", operator, " ", right]


def _override(ctx: PrintContext) -> Doc | None:
    override = ctx.node.get("override")
    if override is None:
        return None
    if not override:
        return "override"
    return ["override(", join(", ", ctx.print_each("override")), ")"]


def _in_for_header(ctx: PrintContext) -> bool:
    parent = ctx.path.parent
    return (
        parent is not None
        and parent.type == "ForStatement"
        and ctx.path.parent_slot in ("initExpression", "loopExpression")
    )


def _semicolon(ctx: PrintContext) -> str:
    return "" if _in_for_header(ctx) else ";"


def _literal_fragments(ctx: PrintContext, prefix: str, flags: Sequence[bool]) -> Doc:
    node = ctx.node
    parts = node.get("parts") or (node["value"],)
    if len(parts) != len(flags):
        raise AstLoadError(
            f"{node.type} has {len(parts)} parts but {len(flags)} prefix flags",
            node.span,
        )
    fragments = [
        (prefix if flag else "") + print_string(part, ctx.options)
        for part, flag in zip(parts, flags)
    ]
    return group(indent(join(line, fragments)))


# ── Source unit and directives ───────────────────────────────────


@rule("SourceUnit")
def _source_unit(ctx: PrintContext) -> Doc:
    children = ctx.node.get("children") or ()
    dangling = ctx.dangling_comments()
    if not children and not dangling:
        return ""
    parts: list = []
    if children:
        parts.append(_preserving_empty_lines(ctx, "children", spaced=_SPACED_MEMBERS))
    if dangling:
        if children:
            parts.append(hardline)
        parts.append(print_dangling_comments(dangling, ctx.text))
    parts.append(hardline)
    return parts


@rule("PragmaDirective")
def _pragma_directive(ctx: PrintContext) -> Doc:
    node = ctx.node
    try:
        value = normalize_pragma_value(node.get("value") or "")
    except InvalidVersionRange as e:
        e.span = node.span
        raise
    if not value:
        return ["pragma ", node["name"], ";"]
    return ["pragma ", node["name"], " ", value, ";"]


@rule("ImportDirective")
def _import_directive(ctx: PrintContext) -> Doc:
    node = ctx.node
    path = print_string(node["path"], ctx.options)
    aliases = node.get("symbolAliases")
    if aliases:
        items = [name if alias is None else f"{name} as {alias}" for name, alias in aliases]
        return ["import ", _print_braces(ctx, items), " from ", path, ";"]
    if node.get("unitAlias"):
        return ["import ", path, " as ", node["unitAlias"], ";"]
    return ["import ", path, ";"]


# ── Contracts and declarations ───────────────────────────────────


@rule("ContractDefinition")
def _contract_definition(ctx: PrintContext) -> Doc:
    node = ctx.node
    kind = node.get("kind", "contract")
    keyword = "abstract contract" if kind == "abstract" else kind
    bases = ctx.print_each("baseContracts")
    if bases:
        inheritance = [" is", indent([line, join([",", line], bases)]), line]
    else:
        inheritance = " "
    return [
        group([keyword, " ", node["name"], inheritance, "{"]),
        _block_body(ctx, "subNodes", spaced=_SPACED_MEMBERS),
        "}",
    ]


@rule("InheritanceSpecifier")
def _inheritance_specifier(ctx: PrintContext) -> Doc:
    if ctx.node.get("arguments"):
        return [ctx.print("baseName"), _print_parameters(ctx, "arguments")]
    return ctx.print("baseName")


@rule("StateVariableDeclaration")
def _state_variable_declaration(ctx: PrintContext) -> Doc:
    node = ctx.node
    declaration = ctx.print("variables", 0)
    if node.get("initialValue") is not None:
        declaration = _print_assignment(
            declaration, "=", node["initialValue"], ctx.print("initialValue")
        )
    return [declaration, ";"]


@rule("FileLevelConstant")
def _file_level_constant(ctx: PrintContext) -> Doc:
    node = ctx.node
    left = [ctx.print("typeName"), " constant ", node["name"]]
    return [
        _print_assignment(left, "=", node["initialValue"], ctx.print("initialValue")),
        ";",
    ]


@rule("VariableDeclaration")
def _variable_declaration(ctx: PrintContext) -> Doc:
    node = ctx.node
    parts: list = [ctx.print("typeName") if node.get("typeName") else "var"]
    if node.get("isIndexed"):
        parts.append(" indexed")
    if node.get("isStateVar"):
        visibility = node.get("visibility")
        if visibility and visibility != "default":
            parts.append(f" {visibility}")
        if node.get("isDeclaredConst"):
            parts.append(" constant")
        if node.get("isImmutable"):
            parts.append(" immutable")
        override = _override(ctx)
        if override is not None:
            parts.append([" ", override])
    if node.get("storageLocation"):
        parts.append(f" {node['storageLocation']}")
    if node.get("name"):
        parts.append(f" {node['name']}")
    return parts


@rule("UsingForDeclaration")
def _using_for_declaration(ctx: PrintContext) -> Doc:
    node = ctx.node
    functions = node.get("functions")
    library = ["{", ", ".join(functions), "}"] if functions else node["libraryName"]
    target = ctx.print("typeName") if node.get("typeName") is not None else "*"
    return [
        "using ", library, " for ", target,
        " global" if node.get("isGlobal") else "",
        ";",
    ]


@rule("StructDefinition")
def _struct_definition(ctx: PrintContext) -> Doc:
    return ["struct ", ctx.node["name"], " {", _block_body(ctx, "members", suffix=";"), "}"]


@rule("EnumDefinition")
def _enum_definition(ctx: PrintContext) -> Doc:
    members = ctx.print_each("members")
    if not members:
        return ["enum ", ctx.node["name"], " {}"]
    return ["enum ", ctx.node["name"], " ", _print_braces(ctx, members)]


@rule("EnumValue")
def _enum_value(ctx: PrintContext) -> Doc:
    return ctx.node["name"]


@rule("EventDefinition")
def _event_definition(ctx: PrintContext) -> Doc:
    node = ctx.node
    return [
        "event ", node["name"], _print_parameters(ctx, "parameters"),
        " anonymous" if node.get("isAnonymous") else "",
        ";",
    ]


@rule("CustomErrorDefinition")
def _custom_error_definition(ctx: PrintContext) -> Doc:
    return ["error ", ctx.node["name"], _print_parameters(ctx, "parameters"), ";"]


@rule("TypeDefinition")
def _type_definition(ctx: PrintContext) -> Doc:
    return ["type ", ctx.node["name"], " is ", ctx.print("definition"), ";"]


def _function_keyword(ctx: PrintContext) -> str:
    node = ctx.node
    if node.get("isConstructor"):
        return "constructor"
    if node.get("isReceiveEther"):
        return "receive"
    if node.get("isFallback"):
        # Pre-0.6 fallbacks are unnamed functions
        written_as_function = (
            node.span is not None and ctx.text.startswith("function", node.span.start)
        )
        if not written_as_function:
            return "fallback"
    name = node.get("name")
    return f"function {name}" if name else "function"


@rule("FunctionDefinition")
def _function_definition(ctx: PrintContext) -> Doc:
    node = ctx.node
    attributes: list = []
    visibility = node.get("visibility")
    if visibility and visibility != "default":
        attributes.append(visibility)
    if node.get("stateMutability"):
        attributes.append(node["stateMutability"])
    if node.get("isVirtual"):
        attributes.append("virtual")
    override = _override(ctx)
    if override is not None:
        attributes.append(override)
    attributes.extend(ctx.print_each("modifiers"))
    if node.get("returnParameters"):
        attributes.append(["returns ", _print_parameters(ctx, "returnParameters")])

    signature = [
        _function_keyword(ctx),
        _print_parameters(ctx, "parameters"),
        indent([[line, attribute] for attribute in attributes]),
    ]
    if node.get("body") is None:
        return group([signature, ";"])
    return [group([signature, line if attributes else " "]), ctx.print("body")]


@rule("ModifierDefinition")
def _modifier_definition(ctx: PrintContext) -> Doc:
    node = ctx.node
    parts: list = ["modifier ", node["name"]]
    if node.get("parameters"):
        parts.append(_print_parameters(ctx, "parameters"))
    if node.get("isVirtual"):
        parts.append(" virtual")
    override = _override(ctx)
    if override is not None:
        parts.append([" ", override])
    if node.get("body") is None:
        parts.append(";")
    else:
        parts.extend([" ", ctx.print("body")])
    return parts


@rule("ModifierInvocation")
def _modifier_invocation(ctx: PrintContext) -> Doc:
    if ctx.node.get("arguments"):
        return [ctx.node["name"], _print_parameters(ctx, "arguments")]
    return ctx.node["name"]


# ── Type names ───────────────────────────────────────────────────


@rule("ElementaryTypeName")
def _elementary_type_name(ctx: PrintContext) -> Doc:
    name = ctx.node["name"]
    if ctx.options.explicit_types == "always":
        name = _EXPLICIT_TYPES.get(name, name)
    elif ctx.options.explicit_types == "never":
        name = _IMPLICIT_TYPES.get(name, name)
    mutability = ctx.node.get("stateMutability")
    return f"{name} {mutability}" if mutability else name


@rule("UserDefinedTypeName")
def _user_defined_type_name(ctx: PrintContext) -> Doc:
    return ctx.node["namePath"]


@rule("Mapping")
def _mapping(ctx: PrintContext) -> Doc:
    node = ctx.node
    key_name = [" ", ctx.print("keyName")] if node.get("keyName") else ""
    value_name = [" ", ctx.print("valueName")] if node.get("valueName") else ""
    return [
        "mapping(", ctx.print("keyType"), key_name,
        " => ", ctx.print("valueType"), value_name, ")",
    ]


@rule("ArrayTypeName")
def _array_type_name(ctx: PrintContext) -> Doc:
    return [ctx.print("baseTypeName"), "[", ctx.print("length"), "]"]


@rule("FunctionTypeName")
def _function_type_name(ctx: PrintContext) -> Doc:
    node = ctx.node
    parts: list = ["function", _print_parameters(ctx, "parameterTypes")]
    visibility = node.get("visibility")
    if visibility and visibility != "default":
        parts.append(f" {visibility}")
    if node.get("stateMutability"):
        parts.append(f" {node['stateMutability']}")
    if node.get("returnTypes"):
        parts.extend([" returns ", _print_parameters(ctx, "returnTypes")])
    return parts


# ── Statements ───────────────────────────────────────────────────


@rule("Block")
def _block(ctx: PrintContext) -> Doc:
    return ["{", _block_body(ctx, "statements"), "}"]


@rule("UncheckedStatement")
def _unchecked_statement(ctx: PrintContext) -> Doc:
    return ["unchecked ", ctx.print("block")]


@rule("ExpressionStatement")
def _expression_statement(ctx: PrintContext) -> Doc:
    return [ctx.print("expression"), _semicolon(ctx)]


@rule("VariableDeclarationStatement")
def _variable_declaration_statement(ctx: PrintContext) -> Doc:
    node = ctx.node
    variables = node["variables"]
    parenthesized = (
        len(variables) != 1
        or variables[0] is None
        or (node.span is not None and ctx.text[node.span.start] == "(")
    )
    if parenthesized:
        declaration = group(["(", *_separated_list(ctx.print_each("variables")), ")"])
    else:
        declaration = ctx.print("variables", 0)
    if node.get("initialValue") is not None:
        declaration = _print_assignment(
            declaration, "=", node["initialValue"], ctx.print("initialValue")
        )
    return [declaration, _semicolon(ctx)]


@rule("IfStatement")
def _if_statement(ctx: PrintContext) -> Doc:
    node = ctx.node
    true_body = node["trueBody"]
    parts: list = ["if ", _print_condition(ctx, "condition")]
    if true_body.type == "Block":
        parts.extend([" ", ctx.print("trueBody")])
    else:
        # A nested if always gets its own line so a following else stays unambiguous
        separator = hardline if true_body.type == "IfStatement" else line
        parts.append(group(indent([separator, ctx.print("trueBody")])))

    false_body = node.get("falseBody")
    if false_body is not None:
        parts.extend([" " if true_body.type == "Block" else hardline, "else"])
        if false_body.type in ("Block", "IfStatement"):
            parts.extend([" ", ctx.print("falseBody")])
        else:
            parts.append(group(indent([line, ctx.print("falseBody")])))
    return parts


@rule("WhileStatement")
def _while_statement(ctx: PrintContext) -> Doc:
    return ["while ", _print_condition(ctx, "condition"), _statement_body(ctx, "body")]


@rule("DoWhileStatement")
def _do_while_statement(ctx: PrintContext) -> Doc:
    return [
        "do", _statement_body(ctx, "body"),
        " while ", _print_condition(ctx, "condition"), ";",
    ]


@rule("ForStatement")
def _for_statement(ctx: PrintContext) -> Doc:
    node = ctx.node
    slots = ("initExpression", "conditionExpression", "loopExpression")
    if all(node.get(slot) is None for slot in slots):
        header: Doc = "for (;;)"
    else:
        init, condition, loop = (ctx.print(slot) for slot in slots)
        header = [
            "for (",
            group([indent([softline, init, ";", line, condition, ";", line, loop]), softline]),
            ")",
        ]
    return [header, _statement_body(ctx, "body")]


@rule("ReturnStatement")
def _return_statement(ctx: PrintContext) -> Doc:
    if ctx.node.get("expression") is None:
        return "return;"
    return ["return ", ctx.print("expression"), ";"]


@rule("EmitStatement")
def _emit_statement(ctx: PrintContext) -> Doc:
    return ["emit ", ctx.print("eventCall"), ";"]


@rule("RevertStatement")
def _revert_statement(ctx: PrintContext) -> Doc:
    return ["revert ", ctx.print("revertCall"), ";"]


@rule("ThrowStatement")
def _throw_statement(ctx: PrintContext) -> Doc:
    return "throw;"


@rule("BreakStatement")
def _break_statement(ctx: PrintContext) -> Doc:
    return "break;"


@rule("ContinueStatement")
def _continue_statement(ctx: PrintContext) -> Doc:
    return "continue;"


@rule("TryStatement")
def _try_statement(ctx: PrintContext) -> Doc:
    parts: list = ["try ", ctx.print("expression")]
    if ctx.node.get("returnParameters"):
        parts.extend([" returns ", _print_parameters(ctx, "returnParameters")])
    parts.extend([" ", ctx.print("body")])
    for clause in ctx.print_each("catchClauses"):
        parts.extend([" ", clause])
    return parts


@rule("CatchClause")
def _catch_clause(ctx: PrintContext) -> Doc:
    node = ctx.node
    parts: list = ["catch "]
    if node.get("kind"):
        parts.append(node["kind"])
    if node.get("parameters") is not None:
        parts.extend([_print_parameters(ctx, "parameters"), " "])
    parts.append(ctx.print("body"))
    return parts


# ── Inline assembly ──────────────────────────────────────────────


@rule("InlineAssemblyStatement")
def _inline_assembly_statement(ctx: PrintContext) -> Doc:
    node = ctx.node
    parts: list = ["assembly "]
    if node.get("language"):
        dialect = node["language"].strip("\"'")
        parts.extend([print_string(dialect, ctx.options), " "])
    if node.get("flags"):
        flags = [print_string(flag.strip("\"'"), ctx.options) for flag in node["flags"]]
        parts.extend(["(", join(", ", flags), ") "])
    parts.append(ctx.print("body"))
    return parts


@rule("AssemblyBlock")
def _assembly_block(ctx: PrintContext) -> Doc:
    return ["{", _block_body(ctx, "operations"), "}"]


@rule("AssemblyCall")
def _assembly_call(ctx: PrintContext) -> Doc:
    node = ctx.node
    # Identifiers are calls without arguments; only real calls end in ")"
    called = node.span is not None and ctx.text[node.span.end : node.span.end + 1] == ")"
    if not node.get("arguments") and not called:
        return node["functionName"]
    return [node["functionName"], "(", join(", ", ctx.print_each("arguments")), ")"]


@rule("AssemblyLocalDefinition")
def _assembly_local_definition(ctx: PrintContext) -> Doc:
    parts: list = ["let ", join(", ", ctx.print_each("names"))]
    if ctx.node.get("expression") is not None:
        parts.extend([" := ", ctx.print("expression")])
    return parts


@rule("AssemblyAssignment")
def _assembly_assignment(ctx: PrintContext) -> Doc:
    return [join(", ", ctx.print_each("names")), " := ", ctx.print("expression")]


@rule("AssemblyStackAssignment")
def _assembly_stack_assignment(ctx: PrintContext) -> Doc:
    return ["=: ", _print_name(ctx, "name")]


@rule("LabelDefinition")
def _label_definition(ctx: PrintContext) -> Doc:
    return [ctx.node["name"], ":"]


@rule("AssemblySwitch")
def _assembly_switch(ctx: PrintContext) -> Doc:
    return [
        "switch ",
        ctx.print("expression"),
        hardline,
        join(hardline, ctx.print_each("cases")),
    ]


@rule("AssemblyCase")
def _assembly_case(ctx: PrintContext) -> Doc:
    head: Doc = "default" if ctx.node.get("default") else ["case ", ctx.print("value")]
    return [head, " ", ctx.print("block")]


@rule("AssemblyFunctionDefinition")
def _assembly_function_definition(ctx: PrintContext) -> Doc:
    node = ctx.node
    parts: list = ["function ", node["name"], "(", join(", ", ctx.print_each("arguments")), ")"]
    returns = ctx.print_each("returnArguments")
    if returns:
        parts.extend([" -> ", join(", ", returns)])
    parts.extend([" ", ctx.print("body")])
    return parts


@rule("AssemblyFor")
def _assembly_for(ctx: PrintContext) -> Doc:
    return [
        "for ", ctx.print("pre"),
        " ", ctx.print("condition"),
        " ", ctx.print("post"),
        " ", ctx.print("body"),
    ]


@rule("AssemblyIf")
def _assembly_if(ctx: PrintContext) -> Doc:
    return ["if ", ctx.print("condition"), " ", ctx.print("body")]


@rule("AssemblyMemberAccess")
def _assembly_member_access(ctx: PrintContext) -> Doc:
    return [ctx.print("expression"), ".", _print_name(ctx, "memberName")]


@rule("Break")
def _assembly_break(ctx: PrintContext) -> Doc:
    return "break"


@rule("Continue")
def _assembly_continue(ctx: PrintContext) -> Doc:
    return "continue"


@rule("DecimalNumber", "HexNumber")
def _assembly_number(ctx: PrintContext) -> Doc:
    return ctx.node["value"]


# ── Expressions ──────────────────────────────────────────────────


@rule("BinaryOperation")
def _binary_operation(ctx: PrintContext) -> Doc:
    node = ctx.node
    operator = node["operator"]
    left, right = ctx.print("left"), ctx.print("right")
    if operator in _ASSIGNMENT_OPERATORS:
        return _print_assignment(left, operator, node["right"], right)

    parts = [left, " ", operator, line, right]
    parent = ctx.path.parent
    if (
        parent is not None
        and parent.type == "BinaryOperation"
        and parent["operator"] not in _ASSIGNMENT_OPERATORS
    ):
        # The outermost operation of a chain owns the group
        return parts
    return group(indent(parts))


@rule("UnaryOperation")
def _unary_operation(ctx: PrintContext) -> Doc:
    node = ctx.node
    operator = node["operator"]
    operand = ctx.print("subExpression")
    if not node.get("isPrefix", True):
        return [operand, operator]
    sub = node["subExpression"]
    # "- -x" must not collapse into "--x"
    needs_space = operator == "delete" or (
        operator in ("-", "+")
        and sub.type == "UnaryOperation"
        and sub.get("isPrefix", True)
        and sub["operator"].startswith(operator)
    )
    return [operator, " " if needs_space else "", operand]


@rule("Conditional")
def _conditional(ctx: PrintContext) -> Doc:
    return group([
        ctx.print("condition"),
        indent([
            line, "? ", ctx.print("trueExpression"),
            line, ": ", ctx.print("falseExpression"),
        ]),
    ])


@rule("FunctionCall")
def _function_call(ctx: PrintContext) -> Doc:
    node = ctx.node
    names = node.get("names") or ()
    if names:
        arguments = [
            [name, ": ", argument]
            for name, argument in zip(names, ctx.print_each("arguments"))
        ]
        return [ctx.print("expression"), "(", _print_braces(ctx, arguments), ")"]
    return [ctx.print("expression"), _print_parameters(ctx, "arguments")]


@rule("MemberAccess")
def _member_access(ctx: PrintContext) -> Doc:
    return [ctx.print("expression"), ".", ctx.node["memberName"]]


@rule("IndexAccess")
def _index_access(ctx: PrintContext) -> Doc:
    return [
        ctx.print("base"),
        "[", group([indent([softline, ctx.print("index")]), softline]), "]",
    ]


@rule("IndexRangeAccess")
def _index_range_access(ctx: PrintContext) -> Doc:
    return [
        ctx.print("base"),
        "[", ctx.print("indexStart"), ":", ctx.print("indexEnd"), "]",
    ]


@rule("TupleExpression")
def _tuple_expression(ctx: PrintContext) -> Doc:
    opening, closing = ("[", "]") if ctx.node.get("isArray") else ("(", ")")
    components = ctx.print_each("components")
    return group([opening, *_separated_list(components), closing])


@rule("NewExpression")
def _new_expression(ctx: PrintContext) -> Doc:
    return ["new ", ctx.print("typeName")]


@rule("NameValueExpression")
def _name_value_expression(ctx: PrintContext) -> Doc:
    edge = _bracket_edge(ctx)
    return [
        ctx.print("expression"),
        group(["{", indent([edge, ctx.print("arguments")]), edge, "}"]),
    ]


@rule("NameValueList")
def _name_value_list(ctx: PrintContext) -> Doc:
    names = ctx.node.get("names") or ()
    items = [
        [name, ": ", argument]
        for name, argument in zip(names, ctx.print_each("arguments"))
    ]
    return join([",", line], items)


@rule("Identifier")
def _identifier(ctx: PrintContext) -> Doc:
    return ctx.node["name"]


@rule("NumberLiteral")
def _number_literal(ctx: PrintContext) -> Doc:
    number = print_number(ctx.node["number"])
    unit = ctx.node.get("subdenomination")
    return f"{number} {unit}" if unit else number


@rule("BooleanLiteral")
def _boolean_literal(ctx: PrintContext) -> Doc:
    return "true" if ctx.node["value"] else "false"


@rule("StringLiteral")
def _string_literal(ctx: PrintContext) -> Doc:
    node = ctx.node
    parts = node.get("parts") or (node["value"],)
    flags = node.get("isUnicode", ())
    if isinstance(flags, bool):
        # Older parsers carry a single flag for the whole literal
        flags = (flags,) * len(parts)
    return _literal_fragments(ctx, "unicode", flags)


@rule("HexLiteral")
def _hex_literal(ctx: PrintContext) -> Doc:
    node = ctx.node
    parts = node.get("parts") or (node["value"],)
    return _literal_fragments(ctx, "hex", (True,) * len(parts))

"""JavaScript printer for Svelte2JS compiler

Turns ESTree nodes back into JavaScript source. Used to inline the
instrumented component script into the generated module.

Expressions are generated bottom-up together with their precedence; a
child whose precedence is lower than its position requires is wrapped
in parentheses.
"""

import json
from typing import Any, List, Tuple


class Precedence:
    """Operator precedence levels, higher binds tighter"""
    SEQUENCE = 0
    YIELD = 1
    ASSIGNMENT = 1
    CONDITIONAL = 2
    ARROW = 2
    COALESCE = 3
    LOGICAL_OR = 3
    LOGICAL_AND = 4
    BITWISE_OR = 5
    BITWISE_XOR = 6
    BITWISE_AND = 7
    EQUALITY = 8
    RELATIONAL = 9
    SHIFT = 10
    ADDITIVE = 11
    MULTIPLICATIVE = 12
    EXPONENT = 13
    UNARY = 14
    AWAIT = 14
    POSTFIX = 15
    CALL = 16
    NEW = 17
    MEMBER = 19
    PRIMARY = 20


BINARY_PRECEDENCE = {
    '??': Precedence.COALESCE,
    '||': Precedence.LOGICAL_OR,
    '&&': Precedence.LOGICAL_AND,
    '|': Precedence.BITWISE_OR,
    '^': Precedence.BITWISE_XOR,
    '&': Precedence.BITWISE_AND,
    '==': Precedence.EQUALITY,
    '!=': Precedence.EQUALITY,
    '===': Precedence.EQUALITY,
    '!==': Precedence.EQUALITY,
    '<': Precedence.RELATIONAL,
    '>': Precedence.RELATIONAL,
    '<=': Precedence.RELATIONAL,
    '>=': Precedence.RELATIONAL,
    'in': Precedence.RELATIONAL,
    'instanceof': Precedence.RELATIONAL,
    '<<': Precedence.SHIFT,
    '>>': Precedence.SHIFT,
    '>>>': Precedence.SHIFT,
    '+': Precedence.ADDITIVE,
    '-': Precedence.ADDITIVE,
    '*': Precedence.MULTIPLICATIVE,
    '/': Precedence.MULTIPLICATIVE,
    '%': Precedence.MULTIPLICATIVE,
    '**': Precedence.EXPONENT,
}

WORD_OPERATORS = {'typeof', 'void', 'delete'}

Generated = Tuple[str, int]


class JsPrinter:
    """Generates JavaScript source from ESTree nodes"""

    def __init__(self, indent: str = "  ") -> None:
        """Initialize printer

        Args:
            indent: Text of one indentation level
        """
        self.indent_unit = indent

    def generate(self, node: Any, level: int = 0) -> str:
        """Generate source for a Program, statement or expression

        Args:
            node: ESTree node
            level: Indentation level of the first line

        Returns:
            JavaScript source
        """
        if node.type == "Program":
            return self.program(node, level)
        if hasattr(self, f"stmt_{node.type}"):
            return self._indent(level) + self.statement(node, level)
        return self.expression(node)

    def program(self, node: Any, level: int = 0) -> str:
        """Generate all top-level statements, one per line group"""
        return "\n".join(self._indent(level) + self.statement(stmt, level) for stmt in node.body)

    def _indent(self, level: int) -> str:
        return self.indent_unit * level

    # Statements

    def statement(self, node: Any, level: int) -> str:
        """Generate a statement; the first line carries no indentation

        Raises:
            NotImplementedError: If node type not supported
        """
        method = getattr(self, f"stmt_{node.type}", None)
        if method is None:
            raise NotImplementedError(f"Statement type {node.type} not yet implemented")
        return method(node, level)

    def _body(self, node: Any, level: int) -> str:
        """Generate a loop or branch body following its header"""
        return " " + self.statement(node, level)

    def stmt_BlockStatement(self, node: Any, level: int) -> str:
        if not node.body:
            return "{}"
        inner = [self._indent(level + 1) + self.statement(stmt, level + 1) for stmt in node.body]
        return "{\n" + "\n".join(inner) + "\n" + self._indent(level) + "}"

    def stmt_ExpressionStatement(self, node: Any, level: int) -> str:
        text = self.expression(node.expression, Precedence.SEQUENCE, level)
        if text.startswith(("{", "function", "class", "async function", "let [")):
            text = f"({text})"
        return text + ";"

    def stmt_VariableDeclaration(self, node: Any, level: int) -> str:
        return self._declaration(node, level) + ";"

    def _declaration(self, node: Any, level: int) -> str:
        declarators = []
        for declarator in node.declarations:
            text = self.pattern(declarator.id, level)
            if declarator.init is not None:
                text += " = " + self.expression(declarator.init, Precedence.ASSIGNMENT, level)
            declarators.append(text)
        return f"{node.kind} " + ", ".join(declarators)

    def stmt_FunctionDeclaration(self, node: Any, level: int) -> str:
        return self._function(node, level)

    def stmt_ClassDeclaration(self, node: Any, level: int) -> str:
        return self._class(node, level)

    def stmt_ReturnStatement(self, node: Any, level: int) -> str:
        if node.argument is None:
            return "return;"
        return "return " + self.expression(node.argument, Precedence.SEQUENCE, level) + ";"

    def stmt_ThrowStatement(self, node: Any, level: int) -> str:
        return "throw " + self.expression(node.argument, Precedence.SEQUENCE, level) + ";"

    def stmt_BreakStatement(self, node: Any, level: int) -> str:
        return f"break {node.label.name};" if node.label is not None else "break;"

    def stmt_ContinueStatement(self, node: Any, level: int) -> str:
        return f"continue {node.label.name};" if node.label is not None else "continue;"

    def stmt_EmptyStatement(self, node: Any, level: int) -> str:
        return ";"

    def stmt_DebuggerStatement(self, node: Any, level: int) -> str:
        return "debugger;"

    def stmt_LabeledStatement(self, node: Any, level: int) -> str:
        return f"{node.label.name}:" + self._body(node.body, level)

    def stmt_IfStatement(self, node: Any, level: int) -> str:
        text = f"if ({self.expression(node.test, Precedence.SEQUENCE, level)})"
        text += self._body(node.consequent, level)
        if node.alternate is not None:
            if node.consequent.type == "BlockStatement":
                text += " else"
            else:
                text += "\n" + self._indent(level) + "else"
            text += self._body(node.alternate, level)
        return text

    def stmt_ForStatement(self, node: Any, level: int) -> str:
        if node.init is None:
            init = ""
        elif node.init.type == "VariableDeclaration":
            init = self._declaration(node.init, level)
        else:
            init = self.expression(node.init, Precedence.SEQUENCE, level)
        test = self.expression(node.test, Precedence.SEQUENCE, level) if node.test is not None else ""
        update = self.expression(node.update, Precedence.SEQUENCE, level) if node.update is not None else ""
        return f"for ({init}; {test}; {update})" + self._body(node.body, level)

    def stmt_ForInStatement(self, node: Any, level: int) -> str:
        return self._for_each(node, "in", level)

    def stmt_ForOfStatement(self, node: Any, level: int) -> str:
        return self._for_each(node, "of", level)

    def _for_each(self, node: Any, keyword: str, level: int) -> str:
        if node.left.type == "VariableDeclaration":
            left = self._declaration(node.left, level)
        else:
            left = self.pattern(node.left, level)
        right = self.expression(node.right, Precedence.ASSIGNMENT, level)
        return f"for ({left} {keyword} {right})" + self._body(node.body, level)

    def stmt_WhileStatement(self, node: Any, level: int) -> str:
        return f"while ({self.expression(node.test, Precedence.SEQUENCE, level)})" + self._body(node.body, level)

    def stmt_DoWhileStatement(self, node: Any, level: int) -> str:
        body = self._body(node.body, level)
        return f"do{body} while ({self.expression(node.test, Precedence.SEQUENCE, level)});"

    def stmt_SwitchStatement(self, node: Any, level: int) -> str:
        lines = [f"switch ({self.expression(node.discriminant, Precedence.SEQUENCE, level)}) {{"]
        for case in node.cases:
            if case.test is None:
                lines.append(self._indent(level + 1) + "default:")
            else:
                lines.append(self._indent(level + 1) + f"case {self.expression(case.test, Precedence.SEQUENCE, level)}:")
            for stmt in case.consequent:
                lines.append(self._indent(level + 2) + self.statement(stmt, level + 2))
        lines.append(self._indent(level) + "}")
        return "\n".join(lines)

    def stmt_TryStatement(self, node: Any, level: int) -> str:
        text = "try " + self.statement(node.block, level)
        if node.handler is not None:
            handler = node.handler
            if handler.param is not None:
                text += f" catch ({self.pattern(handler.param, level)}) "
            else:
                text += " catch "
            text += self.statement(handler.body, level)
        if node.finalizer is not None:
            text += " finally " + self.statement(node.finalizer, level)
        return text

    # Functions and classes

    def _params(self, params: List[Any], level: int) -> str:
        return "(" + ", ".join(self.pattern(param, level) for param in params) + ")"

    def _function(self, node: Any, level: int) -> str:
        prefix = "async " if getattr(node, "isAsync", False) else ""
        star = "*" if getattr(node, "generator", False) else ""
        name = f" {node.id.name}" if node.id is not None else ""
        params = self._params(node.params, level)
        return f"{prefix}function{star}{name}{params} " + self.statement(node.body, level)

    def _class(self, node: Any, level: int) -> str:
        text = "class"
        if node.id is not None:
            text += f" {node.id.name}"
        if node.superClass is not None:
            text += " extends " + self.expression(node.superClass, Precedence.CALL, level)
        methods = node.body.body
        if not methods:
            return text + " {}"
        lines = [text + " {"]
        for method in methods:
            lines.append(self._indent(level + 1) + self._method(method, level + 1))
        lines.append(self._indent(level) + "}")
        return "\n".join(lines)

    def _method(self, node: Any, level: int) -> str:
        value = node.value
        prefix = "static " if getattr(node, "static", False) else ""
        if node.kind in ("get", "set"):
            prefix += node.kind + " "
        if getattr(value, "isAsync", False):
            prefix += "async "
        if getattr(value, "generator", False):
            prefix += "*"
        key = self._property_key(node, level)
        return f"{prefix}{key}{self._params(value.params, level)} " + self.statement(value.body, level)

    def _property_key(self, node: Any, level: int) -> str:
        if node.computed:
            return "[" + self.expression(node.key, Precedence.ASSIGNMENT, level) + "]"
        return self.expression(node.key, Precedence.PRIMARY, level)

    # Patterns

    def pattern(self, node: Any, level: int = 0) -> str:
        """Generate a binding or assignment target"""
        if node.type == "ObjectPattern":
            return self._object(node.properties, level)
        if node.type == "ArrayPattern":
            return self._array(node.elements, level)
        if node.type == "AssignmentPattern":
            return self.pattern(node.left, level) + " = " + self.expression(node.right, Precedence.ASSIGNMENT, level)
        if node.type == "RestElement":
            return "..." + self.pattern(node.argument, level)
        return self.expression(node, Precedence.CALL, level)

    # Expressions

    def expression(self, node: Any, required: int = Precedence.SEQUENCE, level: int = 0) -> str:
        """Generate an expression, parenthesized if weaker than required

        Raises:
            NotImplementedError: If node type not supported
        """
        method = getattr(self, f"expr_{node.type}", None)
        if method is None:
            raise NotImplementedError(f"Expression type {node.type} not yet implemented")
        text, precedence = method(node, level)
        if precedence < required:
            return f"({text})"
        return text

    def expr_Identifier(self, node: Any, level: int) -> Generated:
        return node.name, Precedence.PRIMARY

    def expr_Literal(self, node: Any, level: int) -> Generated:
        raw = getattr(node, "raw", None)
        if raw is not None:
            return raw, Precedence.PRIMARY
        if node.value is None:
            return "null", Precedence.PRIMARY
        if isinstance(node.value, bool):
            return ("true" if node.value else "false"), Precedence.PRIMARY
        if isinstance(node.value, str):
            return json.dumps(node.value), Precedence.PRIMARY
        return str(node.value), Precedence.PRIMARY

    def expr_ThisExpression(self, node: Any, level: int) -> Generated:
        return "this", Precedence.PRIMARY

    def expr_Super(self, node: Any, level: int) -> Generated:
        return "super", Precedence.PRIMARY

    def expr_MetaProperty(self, node: Any, level: int) -> Generated:
        return f"{node.meta.name}.{node.property.name}", Precedence.PRIMARY

    def expr_TemplateLiteral(self, node: Any, level: int) -> Generated:
        parts = ["`"]
        for index, quasi in enumerate(node.quasis):
            parts.append(_template_raw(quasi))
            if index < len(node.expressions):
                parts.append("${" + self.expression(node.expressions[index], Precedence.SEQUENCE, level) + "}")
        parts.append("`")
        return "".join(parts), Precedence.PRIMARY

    def expr_TaggedTemplateExpression(self, node: Any, level: int) -> Generated:
        tag = self.expression(node.tag, Precedence.CALL, level)
        return tag + self.expr_TemplateLiteral(node.quasi, level)[0], Precedence.CALL

    def expr_ArrayExpression(self, node: Any, level: int) -> Generated:
        return self._array(node.elements, level), Precedence.PRIMARY

    def _array(self, elements: List[Any], level: int) -> str:
        items = []
        for element in elements:
            if element is None:
                items.append("")
            elif element.type in ("ObjectPattern", "ArrayPattern", "AssignmentPattern", "RestElement"):
                items.append(self.pattern(element, level))
            else:
                items.append(self.expression(element, Precedence.ASSIGNMENT, level))
        trailing = "," if elements and elements[-1] is None else ""
        return "[" + ", ".join(items) + trailing + "]"

    def expr_ObjectExpression(self, node: Any, level: int) -> Generated:
        return self._object(node.properties, level), Precedence.PRIMARY

    def _object(self, properties: List[Any], level: int) -> str:
        if not properties:
            return "{}"
        return "{ " + ", ".join(self._property(prop, level) for prop in properties) + " }"

    def _property(self, node: Any, level: int) -> str:
        if node.type in ("SpreadElement", "RestElement"):
            return "..." + self.pattern(node.argument, level)
        value = node.value
        if node.kind in ("get", "set") or getattr(node, "method", False):
            prefix = node.kind + " " if node.kind in ("get", "set") else ""
            if getattr(value, "isAsync", False):
                prefix += "async "
            if getattr(value, "generator", False):
                prefix += "*"
            key = self._property_key(node, level)
            return f"{prefix}{key}{self._params(value.params, level)} " + self.statement(value.body, level)
        if getattr(node, "shorthand", False):
            return self.pattern(value, level)
        return self._property_key(node, level) + ": " + self._property_value(value, level)

    def _property_value(self, value: Any, level: int) -> str:
        if value.type in ("ObjectPattern", "ArrayPattern", "AssignmentPattern"):
            return self.pattern(value, level)
        return self.expression(value, Precedence.ASSIGNMENT, level)

    def expr_SpreadElement(self, node: Any, level: int) -> Generated:
        return "..." + self.expression(node.argument, Precedence.ASSIGNMENT, level), Precedence.ASSIGNMENT

    def expr_FunctionExpression(self, node: Any, level: int) -> Generated:
        return self._function(node, level), Precedence.PRIMARY

    def expr_ArrowFunctionExpression(self, node: Any, level: int) -> Generated:
        prefix = "async " if getattr(node, "isAsync", False) else ""
        params = self._params(node.params, level)
        if node.body.type == "BlockStatement":
            body = self.statement(node.body, level)
        else:
            body = self.expression(node.body, Precedence.ASSIGNMENT, level)
            if body.startswith("{"):
                body = f"({body})"
        return f"{prefix}{params} => {body}", Precedence.ARROW

    def expr_ClassExpression(self, node: Any, level: int) -> Generated:
        return self._class(node, level), Precedence.PRIMARY

    def expr_SequenceExpression(self, node: Any, level: int) -> Generated:
        items = [self.expression(expr, Precedence.ASSIGNMENT, level) for expr in node.expressions]
        return ", ".join(items), Precedence.SEQUENCE

    def expr_AssignmentExpression(self, node: Any, level: int) -> Generated:
        left = self.pattern(node.left, level)
        right = self.expression(node.right, Precedence.ASSIGNMENT, level)
        return f"{left} {node.operator} {right}", Precedence.ASSIGNMENT

    def expr_ConditionalExpression(self, node: Any, level: int) -> Generated:
        test = self.expression(node.test, Precedence.COALESCE, level)
        consequent = self.expression(node.consequent, Precedence.ASSIGNMENT, level)
        alternate = self.expression(node.alternate, Precedence.ASSIGNMENT, level)
        return f"{test} ? {consequent} : {alternate}", Precedence.CONDITIONAL

    def expr_BinaryExpression(self, node: Any, level: int) -> Generated:
        precedence = BINARY_PRECEDENCE[node.operator]
        if node.operator == "**":
            # a unary operand on the left of ** is a syntax error without parentheses
            left = self.expression(node.left, Precedence.UNARY + 1, level)
            right = self.expression(node.right, precedence, level)
        else:
            left = self._operand(node.left, node.operator, precedence, level)
            right = self._operand(node.right, node.operator, precedence + 1, level)
        return f"{left} {node.operator} {right}", precedence

    def expr_LogicalExpression(self, node: Any, level: int) -> Generated:
        return self.expr_BinaryExpression(node, level)

    def _operand(self, node: Any, operator: str, required: int, level: int) -> str:
        """Generate a binary operand; ?? never mixes with || or && unparenthesized"""
        if node.type == "LogicalExpression" and node.operator != operator and "??" in (node.operator, operator):
            return "(" + self.expression(node, Precedence.SEQUENCE, level) + ")"
        return self.expression(node, required, level)

    def expr_UnaryExpression(self, node: Any, level: int) -> Generated:
        argument = self.expression(node.argument, Precedence.UNARY, level)
        operator = node.operator
        if operator in WORD_OPERATORS or (operator in "+-" and argument.startswith(operator)):
            return f"{operator} {argument}", Precedence.UNARY
        return f"{operator}{argument}", Precedence.UNARY

    def expr_UpdateExpression(self, node: Any, level: int) -> Generated:
        if node.prefix:
            argument = self.expression(node.argument, Precedence.UNARY, level)
            return f"{node.operator}{argument}", Precedence.UNARY
        argument = self.expression(node.argument, Precedence.POSTFIX, level)
        return f"{argument}{node.operator}", Precedence.POSTFIX

    def expr_AwaitExpression(self, node: Any, level: int) -> Generated:
        return "await " + self.expression(node.argument, Precedence.UNARY, level), Precedence.AWAIT

    def expr_YieldExpression(self, node: Any, level: int) -> Generated:
        text = "yield*" if node.delegate else "yield"
        if node.argument is not None:
            text += " " + self.expression(node.argument, Precedence.YIELD, level)
        return text, Precedence.YIELD

    def _arguments(self, arguments: List[Any], level: int) -> str:
        return "(" + ", ".join(self.expression(arg, Precedence.ASSIGNMENT, level) for arg in arguments) + ")"

    def expr_CallExpression(self, node: Any, level: int) -> Generated:
        callee = self.expression(node.callee, Precedence.CALL, level)
        return callee + self._arguments(node.arguments, level), Precedence.CALL

    def expr_NewExpression(self, node: Any, level: int) -> Generated:
        callee = self.expression(node.callee, Precedence.NEW, level)
        return "new " + callee + self._arguments(node.arguments, level), Precedence.NEW

    def expr_MemberExpression(self, node: Any, level: int) -> Generated:
        obj = self.expression(node.object, Precedence.CALL, level)
        if node.object.type == "Literal" and obj.isdigit():
            obj = f"({obj})"
        if node.computed:
            return f"{obj}[{self.expression(node.property, Precedence.SEQUENCE, level)}]", Precedence.MEMBER
        return f"{obj}.{node.property.name}", Precedence.MEMBER


def _template_raw(element: Any) -> str:
    """Raw text of a TemplateElement"""
    value = element.value
    if isinstance(value, dict):
        return value["raw"]
    return value.raw

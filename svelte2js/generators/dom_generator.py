"""DOM instruction generator for Svelte2JS compiler

Pass A of code generation: a single pre-order traversal of the markup
that declares one synthetic variable per DOM node and emits the ordered
create / update / destroy instruction lists of the lifecycle object.
Synthetic names never collide with a name the component declares or
references: the mount point and the lifecycle parameters fall back to
suffixed forms such as target_2 when their plain names are taken.
"""

from dataclasses import dataclass, field
from typing import List, Union

from svelte2js.analyzers.reactivity import AnalysisResult
from svelte2js.core.context import CompilationContext
from svelte2js.core.errors import InvalidEventHandler
from svelte2js.core.fragments import Attribute, Element, Expression, ExpressionValue, Fragment, Text
from svelte2js.core.reactivity_logger import DecisionKind
from svelte2js.generators.js_printer import JsPrinter, Precedence
from svelte2js.generators.naming import NamingScheme

ROOT_TARGET = "target"
MOUNT_PARAM = "mountTarget"
CHANGED_PARAM = "changed"


@dataclass(frozen=True)
class CreateElement:
    variable: str
    tag: str


@dataclass(frozen=True)
class CreateText:
    variable: str
    text: str


@dataclass(frozen=True)
class CreateTextFromExpression:
    variable: str
    source: str


@dataclass(frozen=True)
class AppendChild:
    parent: str
    child: str


@dataclass(frozen=True)
class RemoveChild:
    parent: str
    child: str


@dataclass(frozen=True)
class AddEventListener:
    target: str
    event: str
    handler: str


@dataclass(frozen=True)
class RemoveEventListener:
    target: str
    event: str
    handler: str


@dataclass(frozen=True)
class SetTextData:
    variable: str
    source: str


Instruction = Union[
    CreateElement, CreateText, CreateTextFromExpression, AppendChild,
    RemoveChild, AddEventListener, RemoveEventListener, SetTextData,
]


@dataclass(frozen=True)
class GuardedInstruction:
    """Update instruction run only when guard is among the changed names"""
    guard: str
    instruction: Instruction


@dataclass
class GeneratedCode:
    """Instruction lists of a component's lifecycle object"""
    variables: List[str] = field(default_factory=list)
    create: List[Instruction] = field(default_factory=list)
    update: List[GuardedInstruction] = field(default_factory=list)
    destroy: List[Instruction] = field(default_factory=list)
    root: str = ROOT_TARGET
    mount_param: str = MOUNT_PARAM
    changed_param: str = CHANGED_PARAM


class DomGenerator:
    """Generates DOM instructions from the markup tree"""

    def __init__(self, analysis: AnalysisResult, context: CompilationContext) -> None:
        """Initialize DOM generator

        Args:
            analysis: Reactivity analysis of the component
            context: Compilation context
        """
        self.analysis = analysis
        self.context = context
        reserved = analysis.declared_variables | analysis.referenced_names
        reserved |= {context.options.runtime_name}
        self.naming = NamingScheme(context.options.counter_start, reserved)
        self.code = GeneratedCode()
        self.printer = JsPrinter()

    def generate(self, fragments: List[Fragment]) -> GeneratedCode:
        """Generate instructions for top-level fragments

        Args:
            fragments: Markup tree roots

        Returns:
            Generated instruction lists
        """
        self.code.root = self.naming.free_name(ROOT_TARGET)
        self.code.mount_param = self.naming.free_name(MOUNT_PARAM)
        self.code.changed_param = self.naming.free_name(CHANGED_PARAM)
        for fragment in fragments:
            self.visit(fragment, self.code.root)
        return self.code

    def visit(self, node: Union[Fragment, Attribute], parent: str) -> None:
        """Dispatch on the fragment class"""
        method = getattr(self, f"visit_{node.__class__.__name__}")
        method(node, parent)

    def visit_Element(self, node: Element, parent: str) -> None:
        variable = self.naming.element_name(node.name)
        self.code.variables.append(variable)
        self.code.create.append(CreateElement(variable, node.name))
        for attribute in node.attributes:
            self.visit(attribute, variable)
        for child in node.children:
            self.visit(child, variable)
        self.code.create.append(AppendChild(parent, variable))
        self.code.destroy.append(RemoveChild(parent, variable))

    def visit_Text(self, node: Text, parent: str) -> None:
        variable = self.naming.text_name()
        self.code.variables.append(variable)
        self.code.create.append(CreateText(variable, node.value))
        self.code.create.append(AppendChild(parent, variable))

    def visit_Attribute(self, node: Attribute, parent: str) -> None:
        """Emit listener registration for event bindings; other attributes are ignored"""
        prefix = self.context.options.event_prefix
        if not node.name.startswith(prefix):
            return
        event = node.name[len(prefix):]
        handler = node.value.identifier if isinstance(node.value, ExpressionValue) else None
        if handler is None:
            raise InvalidEventHandler(
                f"'{node.name}' handler must be a bare identifier, e.g. {node.name}={{handler}}"
            )
        self.code.create.append(AddEventListener(parent, event, handler))
        self.code.destroy.append(RemoveEventListener(parent, event, handler))

    def visit_Expression(self, node: Expression, parent: str) -> None:
        variable = self.naming.text_name()
        source = self.printer.expression(node.tree, Precedence.ASSIGNMENT)
        self.code.variables.append(variable)
        self.code.create.append(CreateTextFromExpression(variable, source))
        self.code.create.append(AppendChild(parent, variable))

        name = node.identifier
        if name is not None and name in self.analysis.will_change:
            self.code.update.append(GuardedInstruction(name, SetTextData(variable, source)))
            self.context.logger.log(
                DecisionKind.UPDATE_EMITTED, name, f"{variable} re-renders when '{name}' changes"
            )

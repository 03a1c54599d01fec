"""
Bantam Abstract Syntax Tree

Defines AST node classes for the Bantam language and the visitor used to
traverse them.

Every node carries the source line it starts on. Line numbers (and the
filename kept on classes) take no part in node equality, so two trees
parsed from differently laid out sources compare equal when they have
the same structure.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class ASTNode(ABC):
    """Base class for all AST nodes."""
    line_num: int = field(compare=False)

    @abstractmethod
    def accept(self, visitor: 'ASTVisitor') -> Any:
        """Accept a visitor for traversal."""
        pass


@dataclass
class ListNode(ASTNode):
    """Ordered sequence of child nodes, kept in source order."""
    elements: List[Any] = field(default_factory=list)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, index: int) -> Any:
        return self.elements[index]


class Member(ASTNode):
    """Base class for class members (fields and methods)."""
    pass


class Stmt(ASTNode):
    """Base class for statement nodes."""
    pass


class Expr(ASTNode):
    """Base class for expression nodes."""
    pass


# =============================================================================
# Lists
# =============================================================================

@dataclass
class ClassList(ListNode):
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_class_list(self)


@dataclass
class MemberList(ListNode):
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_member_list(self)


@dataclass
class FormalList(ListNode):
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_formal_list(self)


@dataclass
class StmtList(ListNode):
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_stmt_list(self)


@dataclass
class ExprList(ListNode):
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_expr_list(self)


# =============================================================================
# Program, Classes and Members
# =============================================================================

@dataclass
class Program(ASTNode):
    """Root node of the AST."""
    class_list: ClassList

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_program(self)


@dataclass
class Class_(ASTNode):
    """Class declaration with an optional parent class."""
    name: str
    parent: Optional[str]
    member_list: MemberList
    filename: Optional[str] = field(default=None, compare=False)

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_class(self)


@dataclass
class Field(Member):
    """Field declaration with an optional initializer."""
    type_name: str
    name: str
    init: Optional[Expr] = None

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_field(self)


@dataclass
class Method(Member):
    """Method declaration; the body is the statement list of its block."""
    return_type: str
    name: str
    formal_list: FormalList
    stmt_list: StmtList

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_method(self)


@dataclass
class Formal(ASTNode):
    """Method parameter."""
    type_name: str
    name: str

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_formal(self)


# =============================================================================
# Statements
# =============================================================================

@dataclass
class BlockStmt(Stmt):
    stmt_list: StmtList

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_block_stmt(self)


@dataclass
class DeclStmt(Stmt):
    """Local variable declaration; locals are always initialized."""
    name: str
    init: Expr

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_decl_stmt(self)


@dataclass
class ExprStmt(Stmt):
    expr: Expr

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_expr_stmt(self)


@dataclass
class IfStmt(Stmt):
    pred_expr: Expr
    then_stmt: Stmt
    else_stmt: Optional[Stmt] = None

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_if_stmt(self)


@dataclass
class WhileStmt(Stmt):
    pred_expr: Expr
    body_stmt: Stmt

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_while_stmt(self)


@dataclass
class ForStmt(Stmt):
    """For loop; any of the three header expressions may be absent."""
    init_expr: Optional[Expr]
    pred_expr: Optional[Expr]
    update_expr: Optional[Expr]
    body_stmt: Stmt

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_for_stmt(self)


@dataclass
class BreakStmt(Stmt):
    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_break_stmt(self)


@dataclass
class ReturnStmt(Stmt):
    expr: Optional[Expr] = None

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_return_stmt(self)


# =============================================================================
# Expressions
# =============================================================================

@dataclass
class ConstExpr(Expr):
    """Constant expression; the constant is kept as spelled in the source."""
    constant: str


@dataclass
class ConstIntExpr(ConstExpr):
    @property
    def value(self) -> int:
        return int(self.constant)

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_const_int_expr(self)


@dataclass
class ConstBooleanExpr(ConstExpr):
    @property
    def value(self) -> bool:
        return self.constant == "true"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_const_boolean_expr(self)


@dataclass
class ConstStringExpr(ConstExpr):
    """String constant, surrounding quotes included."""

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_const_string_expr(self)


@dataclass
class VarExpr(Expr):
    """
    Variable reference.

    ``ref`` qualifies the name with a receiver: a VarExpr named "this" or
    "super" that has no ref of its own.
    """
    ref: Optional['VarExpr']
    name: str

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_var_expr(self)


@dataclass
class AssignExpr(Expr):
    """Assignment; ``ref_name`` is "this", "super" or None."""
    ref_name: Optional[str]
    name: str
    expr: Expr

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_assign_expr(self)


@dataclass
class DispatchExpr(Expr):
    """Method call, optionally qualified by this or super."""
    ref_expr: Optional[VarExpr]
    method_name: str
    actual_list: ExprList

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_dispatch_expr(self)


@dataclass
class NewExpr(Expr):
    type_name: str

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_new_expr(self)


@dataclass
class CastExpr(Expr):
    type_name: str
    expr: Expr

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_cast_expr(self)


@dataclass
class BinaryExpr(Expr):
    """Base class for binary operator expressions."""
    left_expr: Expr
    right_expr: Expr

    op_name = ""


class BinaryArithExpr(BinaryExpr):
    pass


class BinaryCompExpr(BinaryExpr):
    pass


class BinaryLogicExpr(BinaryExpr):
    pass


@dataclass
class BinaryArithPlusExpr(BinaryArithExpr):
    op_name = "+"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_arith_plus_expr(self)


@dataclass
class BinaryArithMinusExpr(BinaryArithExpr):
    op_name = "-"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_arith_minus_expr(self)


@dataclass
class BinaryArithTimesExpr(BinaryArithExpr):
    op_name = "*"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_arith_times_expr(self)


@dataclass
class BinaryArithDivideExpr(BinaryArithExpr):
    op_name = "/"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_arith_divide_expr(self)


@dataclass
class BinaryArithModulusExpr(BinaryArithExpr):
    op_name = "%"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_arith_modulus_expr(self)


@dataclass
class BinaryCompEqExpr(BinaryCompExpr):
    op_name = "=="

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_comp_eq_expr(self)


@dataclass
class BinaryCompNeExpr(BinaryCompExpr):
    op_name = "!="

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_comp_ne_expr(self)


@dataclass
class BinaryCompLtExpr(BinaryCompExpr):
    op_name = "<"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_comp_lt_expr(self)


@dataclass
class BinaryCompGtExpr(BinaryCompExpr):
    op_name = ">"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_comp_gt_expr(self)


@dataclass
class BinaryCompLeqExpr(BinaryCompExpr):
    op_name = "<="

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_comp_leq_expr(self)


@dataclass
class BinaryCompGeqExpr(BinaryCompExpr):
    op_name = ">="

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_comp_geq_expr(self)


@dataclass
class BinaryLogicAndExpr(BinaryLogicExpr):
    op_name = "&&"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_logic_and_expr(self)


@dataclass
class BinaryLogicOrExpr(BinaryLogicExpr):
    op_name = "||"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_binary_logic_or_expr(self)


@dataclass
class UnaryExpr(Expr):
    """Base class for unary operator expressions."""
    expr: Expr

    op_name = ""


@dataclass
class UnaryNegExpr(UnaryExpr):
    op_name = "-"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_unary_neg_expr(self)


@dataclass
class UnaryNotExpr(UnaryExpr):
    op_name = "!"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_unary_not_expr(self)


@dataclass
class UnaryIncrExpr(UnaryExpr):
    postfix: bool = False

    op_name = "++"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_unary_incr_expr(self)


@dataclass
class UnaryDecrExpr(UnaryExpr):
    postfix: bool = False

    op_name = "--"

    def accept(self, visitor: 'ASTVisitor') -> Any:
        return visitor.visit_unary_decr_expr(self)


# =============================================================================
# Visitor
# =============================================================================

class ASTVisitor:
    """
    Visitor for AST traversal.

    There is one visit method per concrete node class. The defaults visit
    the children in source order and return None, so a subclass only
    overrides the nodes it cares about. Operator nodes fall back to the
    method of their family (``visit_binary_arith_expr``, then
    ``visit_binary_expr``), which lets a subclass handle a whole family
    at once.
    """

    def visit_list_node(self, node: ListNode) -> Any:
        for element in node:
            element.accept(self)
        return None

    def visit_class_list(self, node: ClassList) -> Any:
        return self.visit_list_node(node)

    def visit_member_list(self, node: MemberList) -> Any:
        return self.visit_list_node(node)

    def visit_formal_list(self, node: FormalList) -> Any:
        return self.visit_list_node(node)

    def visit_stmt_list(self, node: StmtList) -> Any:
        return self.visit_list_node(node)

    def visit_expr_list(self, node: ExprList) -> Any:
        return self.visit_list_node(node)

    # Program, classes and members
    def visit_program(self, node: Program) -> Any:
        node.class_list.accept(self)
        return None

    def visit_class(self, node: Class_) -> Any:
        node.member_list.accept(self)
        return None

    def visit_field(self, node: Field) -> Any:
        if node.init is not None:
            node.init.accept(self)
        return None

    def visit_method(self, node: Method) -> Any:
        node.formal_list.accept(self)
        node.stmt_list.accept(self)
        return None

    def visit_formal(self, node: Formal) -> Any:
        return None

    # Statements
    def visit_block_stmt(self, node: BlockStmt) -> Any:
        node.stmt_list.accept(self)
        return None

    def visit_decl_stmt(self, node: DeclStmt) -> Any:
        node.init.accept(self)
        return None

    def visit_expr_stmt(self, node: ExprStmt) -> Any:
        node.expr.accept(self)
        return None

    def visit_if_stmt(self, node: IfStmt) -> Any:
        node.pred_expr.accept(self)
        node.then_stmt.accept(self)
        if node.else_stmt is not None:
            node.else_stmt.accept(self)
        return None

    def visit_while_stmt(self, node: WhileStmt) -> Any:
        node.pred_expr.accept(self)
        node.body_stmt.accept(self)
        return None

    def visit_for_stmt(self, node: ForStmt) -> Any:
        for expr in (node.init_expr, node.pred_expr, node.update_expr):
            if expr is not None:
                expr.accept(self)
        node.body_stmt.accept(self)
        return None

    def visit_break_stmt(self, node: BreakStmt) -> Any:
        return None

    def visit_return_stmt(self, node: ReturnStmt) -> Any:
        if node.expr is not None:
            node.expr.accept(self)
        return None

    # Expressions
    def visit_const_expr(self, node: ConstExpr) -> Any:
        return None

    def visit_const_int_expr(self, node: ConstIntExpr) -> Any:
        return self.visit_const_expr(node)

    def visit_const_boolean_expr(self, node: ConstBooleanExpr) -> Any:
        return self.visit_const_expr(node)

    def visit_const_string_expr(self, node: ConstStringExpr) -> Any:
        return self.visit_const_expr(node)

    def visit_var_expr(self, node: VarExpr) -> Any:
        if node.ref is not None:
            node.ref.accept(self)
        return None

    def visit_assign_expr(self, node: AssignExpr) -> Any:
        node.expr.accept(self)
        return None

    def visit_dispatch_expr(self, node: DispatchExpr) -> Any:
        if node.ref_expr is not None:
            node.ref_expr.accept(self)
        node.actual_list.accept(self)
        return None

    def visit_new_expr(self, node: NewExpr) -> Any:
        return None

    def visit_cast_expr(self, node: CastExpr) -> Any:
        node.expr.accept(self)
        return None

    def visit_binary_expr(self, node: BinaryExpr) -> Any:
        node.left_expr.accept(self)
        node.right_expr.accept(self)
        return None

    def visit_binary_arith_expr(self, node: BinaryArithExpr) -> Any:
        return self.visit_binary_expr(node)

    def visit_binary_arith_plus_expr(self, node: BinaryArithPlusExpr) -> Any:
        return self.visit_binary_arith_expr(node)

    def visit_binary_arith_minus_expr(self, node: BinaryArithMinusExpr) -> Any:
        return self.visit_binary_arith_expr(node)

    def visit_binary_arith_times_expr(self, node: BinaryArithTimesExpr) -> Any:
        return self.visit_binary_arith_expr(node)

    def visit_binary_arith_divide_expr(self, node: BinaryArithDivideExpr) -> Any:
        return self.visit_binary_arith_expr(node)

    def visit_binary_arith_modulus_expr(self, node: BinaryArithModulusExpr) -> Any:
        return self.visit_binary_arith_expr(node)

    def visit_binary_comp_expr(self, node: BinaryCompExpr) -> Any:
        return self.visit_binary_expr(node)

    def visit_binary_comp_eq_expr(self, node: BinaryCompEqExpr) -> Any:
        return self.visit_binary_comp_expr(node)

    def visit_binary_comp_ne_expr(self, node: BinaryCompNeExpr) -> Any:
        return self.visit_binary_comp_expr(node)

    def visit_binary_comp_lt_expr(self, node: BinaryCompLtExpr) -> Any:
        return self.visit_binary_comp_expr(node)

    def visit_binary_comp_gt_expr(self, node: BinaryCompGtExpr) -> Any:
        return self.visit_binary_comp_expr(node)

    def visit_binary_comp_leq_expr(self, node: BinaryCompLeqExpr) -> Any:
        return self.visit_binary_comp_expr(node)

    def visit_binary_comp_geq_expr(self, node: BinaryCompGeqExpr) -> Any:
        return self.visit_binary_comp_expr(node)

    def visit_binary_logic_expr(self, node: BinaryLogicExpr) -> Any:
        return self.visit_binary_expr(node)

    def visit_binary_logic_and_expr(self, node: BinaryLogicAndExpr) -> Any:
        return self.visit_binary_logic_expr(node)

    def visit_binary_logic_or_expr(self, node: BinaryLogicOrExpr) -> Any:
        return self.visit_binary_logic_expr(node)

    def visit_unary_expr(self, node: UnaryExpr) -> Any:
        node.expr.accept(self)
        return None

    def visit_unary_neg_expr(self, node: UnaryNegExpr) -> Any:
        return self.visit_unary_expr(node)

    def visit_unary_not_expr(self, node: UnaryNotExpr) -> Any:
        return self.visit_unary_expr(node)

    def visit_unary_incr_expr(self, node: UnaryIncrExpr) -> Any:
        return self.visit_unary_expr(node)

    def visit_unary_decr_expr(self, node: UnaryDecrExpr) -> Any:
        return self.visit_unary_expr(node)

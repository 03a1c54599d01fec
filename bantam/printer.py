"""
Bantam AST Printers

ASTPrinter dumps the tree for debugging; SourcePrinter turns it back into
Bantam source.
"""

from typing import List

from .ast import *


class ASTPrinter(ASTVisitor):
    """Prints the AST as an indented tree, one node per line."""

    def __init__(self):
        self.indent = 0

    def print(self, node: ASTNode) -> str:
        return node.accept(self)

    def _indent(self) -> str:
        return "  " * self.indent

    def _node(self, label: str, *children) -> str:
        """Render a label followed by its (possibly absent) children one level deeper."""
        self.indent += 1
        lines = [child.accept(self) for child in children if child is not None]
        self.indent -= 1
        return "\n".join([f"{self._indent()}{label}"] + lines)

    def visit_list_node(self, node: ListNode) -> str:
        return self._node(type(node).__name__, *node)

    def visit_program(self, node: Program) -> str:
        return self._node("Program", *node.class_list)

    def visit_class(self, node: Class_) -> str:
        label = f"Class {node.name}"
        if node.parent:
            label += f" extends {node.parent}"
        return self._node(label, *node.member_list)

    def visit_field(self, node: Field) -> str:
        return self._node(f"Field {node.type_name} {node.name}", node.init)

    def visit_method(self, node: Method) -> str:
        params = ", ".join(f"{f.type_name} {f.name}" for f in node.formal_list)
        return self._node(f"Method {node.return_type} {node.name}({params})", *node.stmt_list)

    def visit_formal(self, node: Formal) -> str:
        return f"{self._indent()}Formal {node.type_name} {node.name}"

    def visit_block_stmt(self, node: BlockStmt) -> str:
        return self._node("Block", *node.stmt_list)

    def visit_decl_stmt(self, node: DeclStmt) -> str:
        return self._node(f"VarDecl({node.name})", node.init)

    def visit_expr_stmt(self, node: ExprStmt) -> str:
        return node.expr.accept(self)

    def visit_if_stmt(self, node: IfStmt) -> str:
        return self._node("If", node.pred_expr, node.then_stmt, node.else_stmt)

    def visit_while_stmt(self, node: WhileStmt) -> str:
        return self._node("While", node.pred_expr, node.body_stmt)

    def visit_for_stmt(self, node: ForStmt) -> str:
        return self._node("For", node.init_expr, node.pred_expr, node.update_expr, node.body_stmt)

    def visit_break_stmt(self, node: BreakStmt) -> str:
        return f"{self._indent()}Break"

    def visit_return_stmt(self, node: ReturnStmt) -> str:
        return self._node("Return", node.expr)

    def visit_const_expr(self, node: ConstExpr) -> str:
        return f"{self._indent()}{type(node).__name__}({node.constant})"

    def visit_var_expr(self, node: VarExpr) -> str:
        name = f"{node.ref.name}.{node.name}" if node.ref else node.name
        return f"{self._indent()}Var({name})"

    def visit_assign_expr(self, node: AssignExpr) -> str:
        name = f"{node.ref_name}.{node.name}" if node.ref_name else node.name
        return self._node(f"Assign({name})", node.expr)

    def visit_dispatch_expr(self, node: DispatchExpr) -> str:
        name = f"{node.ref_expr.name}.{node.method_name}" if node.ref_expr else node.method_name
        return self._node(f"Call({name})", *node.actual_list)

    def visit_new_expr(self, node: NewExpr) -> str:
        return f"{self._indent()}New({node.type_name})"

    def visit_cast_expr(self, node: CastExpr) -> str:
        return self._node(f"Cast({node.type_name})", node.expr)

    def visit_binary_expr(self, node: BinaryExpr) -> str:
        return self._node(f"Binary({node.op_name})", node.left_expr, node.right_expr)

    def visit_unary_expr(self, node: UnaryExpr) -> str:
        label = f"Unary({node.op_name})"
        if getattr(node, "postfix", False):
            label = f"Postfix({node.op_name})"
        return self._node(label, node.expr)


class SourcePrinter(ASTVisitor):
    """
    Prints the AST as canonical Bantam source.

    Every operator expression and assignment is wrapped in parentheses,
    so the output reparses to an equal tree whatever the precedence.
    """

    def __init__(self, indent_width: int = 4):
        self.indent_width = indent_width
        self.indent = 0

    def print(self, node: ASTNode) -> str:
        return node.accept(self)

    def _indent(self) -> str:
        return " " * (self.indent * self.indent_width)

    def _body(self, statements) -> List[str]:
        self.indent += 1
        lines = [stmt.accept(self) for stmt in statements]
        self.indent -= 1
        return lines

    def _nested(self, stmt: Stmt) -> str:
        """Render a statement on its own line, one level deeper unless it is a block."""
        if isinstance(stmt, BlockStmt):
            return stmt.accept(self)
        self.indent += 1
        text = stmt.accept(self)
        self.indent -= 1
        return text

    # Program, classes and members
    def visit_program(self, node: Program) -> str:
        return "\n".join(c.accept(self) for c in node.class_list)

    def visit_class(self, node: Class_) -> str:
        header = f"class {node.name}"
        if node.parent:
            header += f" extends {node.parent}"
        lines = [f"{header} {{"] + self._body(node.member_list) + ["}"]
        return "\n".join(lines) + "\n"

    def visit_field(self, node: Field) -> str:
        if node.init is None:
            return f"{self._indent()}{node.type_name} {node.name};"
        return f"{self._indent()}{node.type_name} {node.name} = {node.init.accept(self)};"

    def visit_method(self, node: Method) -> str:
        params = ", ".join(f.accept(self) for f in node.formal_list)
        header = f"{self._indent()}{node.return_type} {node.name}({params}) {{"
        return "\n".join([header] + self._body(node.stmt_list) + [f"{self._indent()}}}"])

    def visit_formal(self, node: Formal) -> str:
        return f"{node.type_name} {node.name}"

    # Statements
    def visit_block_stmt(self, node: BlockStmt) -> str:
        lines = [f"{self._indent()}{{"] + self._body(node.stmt_list) + [f"{self._indent()}}}"]
        return "\n".join(lines)

    def visit_decl_stmt(self, node: DeclStmt) -> str:
        return f"{self._indent()}var {node.name} = {node.init.accept(self)};"

    def visit_expr_stmt(self, node: ExprStmt) -> str:
        return f"{self._indent()}{node.expr.accept(self)};"

    def visit_if_stmt(self, node: IfStmt) -> str:
        lines = [f"{self._indent()}if ({node.pred_expr.accept(self)})", self._nested(node.then_stmt)]
        if node.else_stmt is not None:
            lines += [f"{self._indent()}else", self._nested(node.else_stmt)]
        return "\n".join(lines)

    def visit_while_stmt(self, node: WhileStmt) -> str:
        header = f"{self._indent()}while ({node.pred_expr.accept(self)})"
        return "\n".join([header, self._nested(node.body_stmt)])

    def visit_for_stmt(self, node: ForStmt) -> str:
        slots = [
            expr.accept(self) if expr is not None else ""
            for expr in (node.init_expr, node.pred_expr, node.update_expr)
        ]
        header = f"{self._indent()}for ({slots[0]}; {slots[1]}; {slots[2]})"
        return "\n".join([header, self._nested(node.body_stmt)])

    def visit_break_stmt(self, node: BreakStmt) -> str:
        return f"{self._indent()}break;"

    def visit_return_stmt(self, node: ReturnStmt) -> str:
        if node.expr is None:
            return f"{self._indent()}return;"
        return f"{self._indent()}return {node.expr.accept(self)};"

    # Expressions
    def visit_const_expr(self, node: ConstExpr) -> str:
        return node.constant

    def visit_var_expr(self, node: VarExpr) -> str:
        if node.ref is not None:
            return f"{node.ref.name}.{node.name}"
        return node.name

    def visit_assign_expr(self, node: AssignExpr) -> str:
        target = f"{node.ref_name}.{node.name}" if node.ref_name else node.name
        return f"({target} = {node.expr.accept(self)})"

    def visit_dispatch_expr(self, node: DispatchExpr) -> str:
        args = ", ".join(arg.accept(self) for arg in node.actual_list)
        if node.ref_expr is not None:
            return f"{node.ref_expr.name}.{node.method_name}({args})"
        return f"{node.method_name}({args})"

    def visit_new_expr(self, node: NewExpr) -> str:
        return f"new {node.type_name}()"

    def visit_cast_expr(self, node: CastExpr) -> str:
        return f"cast({node.type_name}, {node.expr.accept(self)})"

    def visit_binary_expr(self, node: BinaryExpr) -> str:
        return f"({node.left_expr.accept(self)} {node.op_name} {node.right_expr.accept(self)})"

    def visit_unary_expr(self, node: UnaryExpr) -> str:
        if getattr(node, "postfix", False):
            return f"({node.expr.accept(self)}{node.op_name})"
        return f"({node.op_name}{node.expr.accept(self)})"

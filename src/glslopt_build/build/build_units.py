"""Build unit definitions for the vendored glsl-optimizer tree.

This is the single registry both toolchain paths build from. Each BuildUnit
becomes one static archive, ``lib<name>.a``; archive members keep the order
of ``source_files``.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

C_EXTENSIONS = (".c",)
CXX_EXTENSIONS = (".cpp", ".cc", ".cxx")

ARCHIVE_PREFIX = "lib"
ARCHIVE_SUFFIX = ".a"


def archive_file_name(unit_name: str) -> str:
    """File name of the static archive for ``unit_name`` (``lib<name>.a``)."""
    return f"{ARCHIVE_PREFIX}{unit_name}{ARCHIVE_SUFFIX}"


@dataclass(frozen=True)
class BuildUnit:
    """A named set of sources compiled into one static archive.

    Attributes:
        name: Archive name without prefix/suffix (e.g. "glcpp")
        source_files: Source paths in archive member order
        include_paths: Include directories, in search order
        requires_cpp: Whether the unit is C++ (compiled with the C++ tool role)
    """

    name: str
    source_files: Tuple[str, ...]
    include_paths: Tuple[str, ...]
    requires_cpp: bool = False

    def __post_init__(self) -> None:
        if not self.source_files:
            raise ValueError(f"Build unit '{self.name}' has no source files")
        expected = CXX_EXTENSIONS if self.requires_cpp else C_EXTENSIONS
        for source in self.source_files:
            if Path(source).suffix not in expected:
                kind = "C++" if self.requires_cpp else "C"
                raise ValueError(f"Build unit '{self.name}' is {kind} but lists {source}")

    @property
    def archive_name(self) -> str:
        return archive_file_name(self.name)


@dataclass(frozen=True)
class ObjectFile:
    """A compiled source file and where its object lives."""

    source_path: str
    object_path: Path


@dataclass(frozen=True)
class Archive:
    """A static archive produced for one build unit."""

    unit_name: str
    archive_path: Path
    members: Tuple[ObjectFile, ...]


GLSL_OPTIMIZER_INCLUDES: Tuple[str, ...] = (
    "glsl-optimizer/include",
    "glsl-optimizer/src/mesa",
    "glsl-optimizer/src/mapi",
    "glsl-optimizer/src/compiler",
    "glsl-optimizer/src/compiler/glsl",
    "glsl-optimizer/src/gallium/auxiliary",
    "glsl-optimizer/src/gallium/include",
    "glsl-optimizer/src",
    "glsl-optimizer/src/util",
)

GLCPP = BuildUnit(
    name="glcpp",
    source_files=(
        "glsl-optimizer/src/compiler/glsl/glcpp/glcpp-lex.c",
        "glsl-optimizer/src/compiler/glsl/glcpp/glcpp-parse.c",
        "glsl-optimizer/src/compiler/glsl/glcpp/pp_standalone_scaffolding.c",
        "glsl-optimizer/src/compiler/glsl/glcpp/pp.c",
        "glsl-optimizer/src/util/blob.c",
        "glsl-optimizer/src/util/half_float.c",
        "glsl-optimizer/src/util/hash_table.c",
        "glsl-optimizer/src/util/mesa-sha1.c",
        "glsl-optimizer/src/util/os_misc.c",
        "glsl-optimizer/src/util/ralloc.c",
        "glsl-optimizer/src/util/set.c",
        "glsl-optimizer/src/util/sha1/sha1.c",
        "glsl-optimizer/src/util/softfloat.c",
        "glsl-optimizer/src/util/string_buffer.c",
        "glsl-optimizer/src/util/strtod.c",
        "glsl-optimizer/src/util/u_debug.c",
    ),
    include_paths=GLSL_OPTIMIZER_INCLUDES,
)

MESA = BuildUnit(
    name="mesa",
    source_files=(
        "glsl-optimizer/src/mesa/program/dummy_errors.c",
        "glsl-optimizer/src/mesa/program/symbol_table.c",
        "glsl-optimizer/src/mesa/main/extensions_table.c",
        "glsl-optimizer/src/compiler/shader_enums.c",
    ),
    include_paths=GLSL_OPTIMIZER_INCLUDES,
)

GLSL_OPTIMIZER = BuildUnit(
    name="glsl_optimizer",
    source_files=(
        "glsl-optimizer/src/compiler/glsl_types.cpp",
        "glsl-optimizer/src/compiler/glsl/ast_array_index.cpp",
        "glsl-optimizer/src/compiler/glsl/ast_expr.cpp",
        "glsl-optimizer/src/compiler/glsl/ast_function.cpp",
        "glsl-optimizer/src/compiler/glsl/ast_to_hir.cpp",
        "glsl-optimizer/src/compiler/glsl/ast_type.cpp",
        "glsl-optimizer/src/compiler/glsl/builtin_functions.cpp",
        "glsl-optimizer/src/compiler/glsl/builtin_types.cpp",
        "glsl-optimizer/src/compiler/glsl/builtin_variables.cpp",
        "glsl-optimizer/src/compiler/glsl/generate_ir.cpp",
        "glsl-optimizer/src/compiler/glsl/glsl_lexer.cpp",
        "glsl-optimizer/src/compiler/glsl/glsl_optimizer.cpp",
        "glsl-optimizer/src/compiler/glsl/glsl_parser_extras.cpp",
        "glsl-optimizer/src/compiler/glsl/glsl_parser.cpp",
        "glsl-optimizer/src/compiler/glsl/glsl_symbol_table.cpp",
        "glsl-optimizer/src/compiler/glsl/hir_field_selection.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_array_refcount.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_basic_block.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_builder.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_clone.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_constant_expression.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_equals.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_expression_flattening.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_function_can_inline.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_function_detect_recursion.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_function.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_hierarchical_visitor.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_hv_accept.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_print_glsl_visitor.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_print_visitor.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_reader.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_rvalue_visitor.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_set_program_inouts.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_unused_structs.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_validate.cpp",
        "glsl-optimizer/src/compiler/glsl/ir_variable_refcount.cpp",
        "glsl-optimizer/src/compiler/glsl/ir.cpp",
        "glsl-optimizer/src/compiler/glsl/link_atomics.cpp",
        "glsl-optimizer/src/compiler/glsl/link_functions.cpp",
        "glsl-optimizer/src/compiler/glsl/link_interface_blocks.cpp",
        "glsl-optimizer/src/compiler/glsl/link_uniform_block_active_visitor.cpp",
        "glsl-optimizer/src/compiler/glsl/link_uniform_blocks.cpp",
        "glsl-optimizer/src/compiler/glsl/link_uniform_initializers.cpp",
        "glsl-optimizer/src/compiler/glsl/link_uniforms.cpp",
        "glsl-optimizer/src/compiler/glsl/link_varyings.cpp",
        "glsl-optimizer/src/compiler/glsl/linker_util.cpp",
        "glsl-optimizer/src/compiler/glsl/linker.cpp",
        "glsl-optimizer/src/compiler/glsl/loop_analysis.cpp",
        "glsl-optimizer/src/compiler/glsl/loop_unroll.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_blend_equation_advanced.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_buffer_access.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_builtins.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_const_arrays_to_uniforms.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_cs_derived.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_discard_flow.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_discard.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_distance.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_if_to_cond_assign.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_instructions.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_int64.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_jumps.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_mat_op_to_vec.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_named_interface_blocks.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_offset_array.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_output_reads.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_packed_varyings.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_packing_builtins.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_precision.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_shared_reference.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_subroutine.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_tess_level.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_texture_projection.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_ubo_reference.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_variable_index_to_cond_assign.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_vec_index_to_cond_assign.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_vec_index_to_swizzle.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_vector_derefs.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_vector_insert.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_vector.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_vertex_id.cpp",
        "glsl-optimizer/src/compiler/glsl/lower_xfb_varying.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_algebraic.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_array_splitting.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_conditional_discard.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_constant_folding.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_constant_propagation.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_constant_variable.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_copy_propagation_elements.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_dead_builtin_variables.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_dead_builtin_varyings.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_dead_code_local.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_dead_code.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_dead_functions.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_flatten_nested_if_blocks.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_flip_matrices.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_function_inlining.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_if_simplification.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_minmax.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_rebalance_tree.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_redundant_jumps.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_structure_splitting.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_swizzle.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_tree_grafting.cpp",
        "glsl-optimizer/src/compiler/glsl/opt_vectorize.cpp",
        "glsl-optimizer/src/compiler/glsl/propagate_invariance.cpp",
        "glsl-optimizer/src/compiler/glsl/s_expression.cpp",
        "glsl-optimizer/src/compiler/glsl/serialize.cpp",
        "glsl-optimizer/src/compiler/glsl/shader_cache.cpp",
        "glsl-optimizer/src/compiler/glsl/standalone_scaffolding.cpp",
        "glsl-optimizer/src/compiler/glsl/string_to_uint_map.cpp",
    ),
    include_paths=GLSL_OPTIMIZER_INCLUDES,
    requires_cpp=True,
)

BUILD_UNITS: Tuple[BuildUnit, ...] = (GLCPP, MESA, GLSL_OPTIMIZER)

"""
bindgen-ts constants for emitted TypeScript and output locations
"""

class InvokeRuntime:
    """Frontend invocation primitive used by every command wrapper"""

    INVOKE_FN = "invoke"
    INVOKE_MODULE = "@tauri-apps/api/tauri"

    @classmethod
    def get_import_statement(cls) -> str:
        """Get the fixed import line for the invocation primitive"""
        return f'import {{ {cls.INVOKE_FN} }} from "{cls.INVOKE_MODULE}";'


class GenerationPaths:
    """Standard paths for code generation"""

    DEFAULT_OUTPUT_DIR = "../src-gen"
    CONFIG_FILE = "bindgen.config.json"
    TYPESCRIPT_SUFFIX = ".ts"


GENERATED_FILE_HEADER = (
    "// This file was generated by bindgen-ts. Do not edit this file manually."
)

SHAPE_SUFFIX = "Shape"

COMMON_TYPE_MAP = {
    "UUID": "string",
    "Decimal": "number",
    "datetime": "string",
    "date": "string",
    "time": "string",
    "Path": "string",
}

# Words that cannot name a function, interface or binding in a strict-mode module
TYPESCRIPT_RESERVED_WORDS = frozenset({
    "arguments", "await", "break", "case", "catch", "class", "const", "continue",
    "debugger", "default", "delete", "do", "else", "enum", "eval", "export",
    "extends", "false", "finally", "for", "function", "if", "implements", "import",
    "in", "instanceof", "interface", "let", "new", "null", "package", "private",
    "protected", "public", "return", "static", "super", "switch", "this", "throw",
    "true", "try", "typeof", "var", "void", "while", "with", "yield",
})

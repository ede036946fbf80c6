"""Language-specific SDK generators."""

from api_sdk_builder.generator.languages.csharp import CSharpGenerator
from api_sdk_builder.generator.languages.go import GoGenerator
from api_sdk_builder.generator.languages.java import JavaGenerator
from api_sdk_builder.generator.languages.javascript import JavaScriptGenerator
from api_sdk_builder.generator.languages.php import PhpGenerator
from api_sdk_builder.generator.languages.python import PythonGenerator

__all__ = [
    "CSharpGenerator",
    "GoGenerator",
    "JavaGenerator",
    "JavaScriptGenerator",
    "PhpGenerator",
    "PythonGenerator",
]

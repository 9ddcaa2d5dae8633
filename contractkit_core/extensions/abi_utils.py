"""
Copyright 2024, Zep Software, Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from ..metadata import AbiAdapter, AbiEntry, AbiParameter, CompilerMetadata


class AbiFunction(BaseModel):
    name: str
    signature: str
    inputs: tuple[AbiParameter, ...] = ()
    outputs: tuple[AbiParameter, ...] = ()
    state_mutability: str | None = None
    comment: str | None = None

    model_config = ConfigDict(frozen=True)


def _function_comment(signature: str, docs: CompilerMetadata | None) -> str | None:
    if docs is None:
        return None
    user_method = docs.userdoc.methods.get(signature) or {}
    dev_method = docs.devdoc.methods.get(signature) or {}
    return user_method.get('notice') or dev_method.get('details')


def extract_functions_from_abi(
    abi: list[AbiEntry] | list[dict[str, Any]],
    compiler_metadata: dict[str, Any] | None = None,
) -> list[AbiFunction]:
    """
    Lists the callable functions of an ABI in declaration order.

    When compiler metadata is supplied, each function carries its natspec
    ``@notice`` (falling back to ``@dev``) as a comment.
    """
    docs = CompilerMetadata.model_validate(compiler_metadata) if compiler_metadata else None
    functions = []
    for entry in AbiAdapter.validate_python(abi):
        if entry.type != 'function':
            continue
        functions.append(
            AbiFunction(
                name=entry.name,
                signature=entry.signature,
                inputs=tuple(entry.inputs),
                outputs=tuple(entry.outputs),
                state_mutability=entry.state_mutability,
                comment=_function_comment(entry.signature, docs),
            )
        )
    return functions


def extract_constructor_params_from_abi(
    abi: list[AbiEntry] | list[dict[str, Any]],
) -> list[AbiParameter]:
    for entry in AbiAdapter.validate_python(abi):
        if entry.type == 'constructor':
            return list(entry.inputs)
    return []

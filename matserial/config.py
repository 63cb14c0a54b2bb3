# coding: utf-8

# Copyright 2023 Inria (Institut National de Recherche en Informatique
# et Automatique)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""TOML-parsable configuration of matserial's tunable behaviours."""

import dataclasses
import warnings

try:
    import tomllib  # type: ignore
except ModuleNotFoundError:
    import tomli as tomllib

from typing import Any, Dict, Optional

from typing_extensions import Self  # future: import from typing (Py>=3.11)


__all__ = [
    "CodecConfig",
    "LoggingConfig",
    "ScalarConfig",
]


@dataclasses.dataclass
class ScalarConfig:
    """Parameters of the scalar text codec.

    Attributes
    ----------
    precision: int or None, default=None
        Number of significant digits used to write floating-point
        scalars as text. If None, write the shortest text that
        round-trips exactly.
    """

    precision: Optional[int] = None

    def __post_init__(self) -> None:
        if self.precision is not None and (
            isinstance(self.precision, bool)
            or not isinstance(self.precision, int)
            or self.precision < 1
        ):
            raise ValueError(
                f"Invalid scalar precision: {self.precision!r}; "
                "expected a positive int or None."
            )


@dataclasses.dataclass
class LoggingConfig:
    """Parameters of the "matserial" logger.

    Attributes
    ----------
    level: str, default="INFO"
        Name of the logging level below which messages are filtered.
    fpath: str or None, default=None
        Optional path to a text file to which to append log records.
    """

    level: str = "INFO"
    fpath: Optional[str] = None


@dataclasses.dataclass
class CodecConfig:
    """Structured configuration, parsable from a TOML file.

    The TOML file may hold the following (optional) sections:

    * `[scalar]`: parameters of a `ScalarConfig`.
    * `[logging]`: parameters of a `LoggingConfig`.

    Instantiation classmethods
    --------------------------
    from_toml:
        Instantiate by parsing a TOML configuration file.
    from_params:
        Instantiate by parsing inputs dicts (or objects).
    """

    scalar: ScalarConfig = dataclasses.field(default_factory=ScalarConfig)
    logging: LoggingConfig = dataclasses.field(default_factory=LoggingConfig)

    @classmethod
    def from_params(
        cls,
        **kwargs: Any,
    ) -> Self:
        """Instantiate a structured configuration from input keyword arguments.

        Each keyword argument should be named after a field of this
        class, and be either an instance of that field's type, a dict
        of keyword arguments to its constructor, or None (in which case
        default values are used).

        Raises
        ------
        RuntimeError:
            In case a field failed to be instantiated from its inputs.

        Warns
        -----
        UserWarning:
            In case some keyword arguments (or nested ones) are unused
            due to the lack of a corresponding dataclass field.
        """
        fields = {}  # type: Dict[str, Any]
        for field in dataclasses.fields(cls):
            inputs = kwargs.pop(field.name, None)
            try:
                fields[field.name] = cls.default_parser(field, inputs)
            except Exception as exc:  # pylint: disable=broad-except
                raise RuntimeError(
                    f"Failed to parse '{field.name}' field: {exc}"
                ) from exc
        for key in kwargs:
            warnings.warn(
                f"Unsupported keyword argument in {cls.__name__}.from_params: "
                f"'{key}'. This argument was ignored."
            )
        return cls(**fields)

    @staticmethod
    def default_parser(
        field: dataclasses.Field,
        inputs: Any,
    ) -> Any:
        """Instantiate a field from python inputs.

        Raises
        ------
        TypeError:
            If `inputs` are of unsupported type.
        """
        if inputs is None:
            return field.default_factory()  # type: ignore
        if isinstance(inputs, field.type):  # type: ignore
            return inputs
        if isinstance(inputs, dict):
            names = {f.name for f in dataclasses.fields(field.type)}
            for key in inputs.keys() - names:
                warnings.warn(
                    f"Unsupported parameter in '{field.name}' section: "
                    f"'{key}'. This parameter was ignored."
                )
            params = {k: v for k, v in inputs.items() if k in names}
            return field.type(**params)  # type: ignore
        raise TypeError(f"Failed to parse inputs for field {field.name}.")

    @classmethod
    def from_toml(
        cls,
        path: str,
    ) -> Self:
        """Parse a structured configuration from a TOML file.

        Raises
        ------
        RuntimeError:
            If parsing fails, whether due to misformatting of the TOML
            file or to invalid parameter values.

        Warns
        -----
        UserWarning:
            In case some sections or parameters of the TOML file are
            unused due to the lack of a corresponding dataclass field.
        """
        try:
            with open(path, "rb") as file:
                config = tomllib.load(file)
        except tomllib.TOMLDecodeError as exc:
            raise RuntimeError(
                "Failed to parse the TOML configuration file."
            ) from exc
        names = {field.name for field in dataclasses.fields(cls)}
        for name in list(config):
            if name not in names:
                warnings.warn(
                    f"Unsupported section encountered in {path} TOML file: "
                    f"'{name}'. This section will be ignored."
                )
                config.pop(name)
        return cls.from_params(**config)

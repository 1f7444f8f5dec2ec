"""
Local variable bindings for attribute value resolution.

Remembers which string literals a locally declared array was initialized
with, so that ``<Comp items={features} />`` can contribute the strings of
``const features = [...]``. Resolution is deliberately shallow: no imports,
no expression evaluation, no reassignment tracking. A member access such as
``config.title`` resolves to everything bound to ``config``.
"""

from typing import Dict, Iterable, Iterator, List


class BindingTable:
    """Identifier name -> string literals it was initialized with, for one file"""

    def __init__(self):
        self._bindings: Dict[str, List[str]] = {}

    def bind(self, name: str, values: Iterable[str]) -> None:
        """
        Record the string values of a declaration.

        Values are stored unfiltered; callers classify them at the point of
        use. A later declaration of the same name replaces the earlier one.
        """
        self._bindings[name] = list(values)

    def resolve(self, name: str) -> List[str]:
        """Values bound to a name, empty if the name was never bound"""
        return list(self._bindings.get(name, ()))

    def resolve_member(self, object_name: str) -> List[str]:
        """Values for ``object_name.anything``: the base object's values"""
        return self.resolve(object_name)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

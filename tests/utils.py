from typing import Any

from objectfaker.generators import BaseGenerator


class ConstantGenerator(BaseGenerator[Any]):
    def __init__(self, target: Any, value: Any) -> None:
        super().__init__()
        self.target = target
        self.value = value
        self.calls = 0

    def generate(self) -> Any:
        self.calls += 1
        return self.value


class FailingGenerator(BaseGenerator[Any]):
    def __init__(self, target: Any) -> None:
        super().__init__()
        self.target = target

    def generate(self) -> Any:
        raise RuntimeError("generator broken")

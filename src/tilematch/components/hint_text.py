from dataclasses import dataclass

@dataclass(slots=True)
class HintText:
    text: str = ""

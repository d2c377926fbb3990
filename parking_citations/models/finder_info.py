from dataclasses import dataclass


@dataclass(frozen=True)
class FinderInfo:
    """ Describes a registered finder """
    class_name: str
    jurisdiction: str
    link: str
    name: str

import re
from typing import List, Optional


class MethodExtractor:
    """
    Finds test method declarations in source text by pattern.

    A declaration is the keyword, one space, then a name starting with a
    lowercase ``test``. Names are returned in the order they appear, repeats
    included.
    """

    NAME_PATTERN = r'(test[A-Za-z0-9_]+)'

    def __init__(self, keyword: str = 'function'):
        self.keyword = keyword
        self.pattern = re.compile(re.escape(keyword) + ' ' + self.NAME_PATTERN)

    def extract(self, content: Optional[str]) -> List[str]:
        if not isinstance(content, str):
            return []
        return self.pattern.findall(content)

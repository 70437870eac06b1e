#keyword table that decides which example diagram the prompt borrows its style from
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
@dataclass(frozen=True)
class Category:
    name: str
    keywords: Tuple[str, ...]
    example: str
# order matters: the first category with a keyword hit wins
CATEGORIES: Tuple[Category, ...] = (
    Category(
        name="cooking",
        keywords=("cooking", "recipe", "kitchen", "food", "pizza", "baking", "ingredients"),
        example="""graph TD;
    A[Start Cooking] --> B[Gather Ingredients];
    B --> C[Prepare Tools];
    C --> D[Follow Recipe Steps];
    D --> E[Cook/Bake];
    E --> F[Check Doneness];
    F --> G[Serve Hot];""",
    ),
    Category(
        name="marketing",
        keywords=("marketing", "advertising", "promotion", "brand", "customer", "sales"),
        example="""graph TD;
    A[Marketing Strategy] --> B[Market Research];
    A --> C[Target Audience];
    A --> D[Brand Positioning];
    B --> E[Customer Analysis];
    C --> F[Segmentation];
    D --> G[Messaging];""",
    ),
    Category(
        name="technology",
        keywords=("software", "development", "programming", "system", "app", "web"),
        example="""graph TD;
    A[Software Development] --> B[Requirements];
    B --> C[Design];
    C --> D[Implementation];
    D --> E[Testing];
    E --> F[Deployment];""",
    ),
    Category(
        name="business",
        keywords=("business", "process", "workflow", "management", "operations"),
        example="""graph TD;
    A[Business Process] --> B[Planning];
    B --> C[Execution];
    C --> D[Monitoring];
    D --> E[Optimization];""",
    ),
)
_BY_NAME = {c.name: c for c in CATEGORIES}
def categorize(topic: str) -> Optional[str]:
    topic_lower = (topic or "").lower()
    for category in CATEGORIES:
        if any(keyword in topic_lower for keyword in category.keywords):
            return category.name
    return None
def get_example(category: Optional[str]) -> str:
    if not category or category not in _BY_NAME:
        return ""
    return _BY_NAME[category].example

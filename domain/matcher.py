from domain.models import RecipeAnswer
from domain.repository import RecipeCatalog


def match_recipe(query: str, catalog: RecipeCatalog) -> RecipeAnswer | None:
    """First recipe whose name or one of its tags appears in the query.

    Plain substring check on lower-cased text, scanned in catalog order.
    """
    query = query.strip().lower()
    if not query:
        return None

    for record in catalog:
        keywords = [record.name, *record.tags]
        if any(k.lower() in query for k in keywords if k.strip()):
            return record.answer
    return None

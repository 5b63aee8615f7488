from .models import RawRecipe


def format_recipe_markdown(recipe: RawRecipe, include_time: bool = True, include_yield: bool = True) -> str:
    """
    Render an already normalized recipe as markdown.

    The title is left out; callers show it on its own.
    """
    lines = [f"**Link to original recipe:** {recipe.source_url}", ""]

    if include_yield and recipe.serves:
        lines.append(f"**Serves:** {recipe.serves}")
    if include_time and recipe.total_time_min:
        lines.append(f"**Total Time:** {recipe.total_time_min} mins")

    lines += ["", "## Ingredients", ""]
    lines += [f"- {ingredient}" for ingredient in recipe.ingredients]

    lines += ["", "## Instructions", ""]
    lines += [f"{idx}. {step}" for idx, step in enumerate(recipe.instructions, start=1)]

    return "\n".join(lines) + "\n"

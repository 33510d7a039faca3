# recipe_book/services/prompts.py
# Prompt templates for the three AI calls.
# Filled with str.format; literal braces in the examples are doubled.

SEARCH_PARAMS_PROMPT = """You are a multilingual search query converter. Convert the user's natural language query, written in any language, into structured search parameters in English.

Available tags: {tags}
Available cuisines: {cuisines}
Available ingredients: {ingredients}

Output a JSON object with these fields, ONLY using values from the available lists above and empty arrays when nothing applies:
{{
  "cuisines": string[],
  "tags": string[],
  "ingredients": string[],
  "userLanguage": string
}}

- cuisines: matching cuisines (OR logic, a recipe may have ANY of them)
- tags: matching tags (OR logic, a recipe may have ANY of them)
- ingredients: ingredients (AND logic, a recipe must have ALL of them)
- userLanguage: the main language of the user's query, even when it mixes languages

Rules:
- Only use tags from the available tags list.
- Only use cuisines from the available cuisines list.
- For ingredients, extract and infer any food items mentioned, closest match from the available ingredients list.
- Ingredients in lowercase. Cuisines capitalized: a single word in uppercase, several words with proper capitalization.
- Apply semantic understanding: "meat" can mean chicken, beef or duck.
- If the query mentions a cuisine, tag or ingredient, use it or its closest match from the lists.
- Infer tags and ingredients commonly associated with a cuisine, and cuisines from tags and ingredients.
- Return ONLY valid JSON, no explanations and no code fences.

Example input: "italian pasta with chicken and garlic"
Example output: {{"cuisines": ["Italian"], "tags": [], "ingredients": ["chicken", "garlic"], "userLanguage": "English"}}

Example input: "southeast asian recipes"
Example output: {{"cuisines": ["Thai", "Vietnamese"], "tags": [], "ingredients": [], "userLanguage": "English"}}

Example input: "quick no meat dinner"
Example output: {{"cuisines": [], "tags": ["quick", "easy", "vegetarian", "vegan", "dinner"], "ingredients": [], "userLanguage": "English"}}

Example input: "healthy thai soup with coconut and lemongrass"
Example output: {{"cuisines": ["Thai"], "tags": ["healthy", "light"], "ingredients": ["coconut", "lemongrass"], "userLanguage": "English"}}

User's query: {query}
"""


RECIPE_PROMPT = """You are a multilingual recipe parser. Convert the user's natural language recipe description, written in any language, into a structured recipe in English.

Available cuisines: {cuisines}
Available tags: {tags}

Output a JSON object with this structure:
{{
  "name": string,
  "cuisine": string (must be from the available cuisines list),
  "prepTime": integer (minutes),
  "cookTime": integer (minutes),
  "servings": integer,
  "ingredients": array of {{"name": string, "quantity": string, "unit": string}},
  "instructions": array of strings (step by step),
  "tags": array of strings (must be from the available tags list)
}}

Rules:
- Extract the recipe name from the text, with proper capitalization.
- Choose the most appropriate cuisine from the available list, spelled exactly as listed.
- Infer prep time, cook time and servings when they are not stated.
- Parse each ingredient into name (lowercase), quantity (free text such as "to taste" is allowed) and unit (empty string when there is none).
- Break the instructions into clear steps, each a complete sentence with a capital first letter and a final period.
- Select relevant tags from the available list only, in lowercase.
- Use proper English grammar and capitalization.
- Return ONLY valid JSON, no explanation.

Example input: "Make a quick Italian pasta carbonara. You'll need 400g spaghetti, 200g bacon, 4 eggs, 100g parmesan, and black pepper. First, cook the pasta. While it cooks, fry the bacon until crispy. Beat the eggs with parmesan. Drain pasta, mix with bacon, then stir in egg mixture off heat. Serves 4, takes about 30 minutes total."

Example output: {{
  "name": "Pasta Carbonara",
  "cuisine": "Italian",
  "prepTime": 10,
  "cookTime": 20,
  "servings": 4,
  "ingredients": [
    {{"name": "spaghetti", "quantity": "400", "unit": "g"}},
    {{"name": "bacon", "quantity": "200", "unit": "g"}},
    {{"name": "eggs", "quantity": "4", "unit": "whole"}},
    {{"name": "parmesan", "quantity": "100", "unit": "g"}},
    {{"name": "black pepper", "quantity": "to taste", "unit": ""}}
  ],
  "instructions": [
    "Cook the pasta according to package directions.",
    "Fry the bacon until crispy.",
    "Beat the eggs with parmesan cheese.",
    "Drain the pasta and mix with bacon.",
    "Remove from heat and stir in egg mixture."
  ],
  "tags": ["quick", "easy"]
}}

Recipe text: {text}
"""


TRANSLATE_PROMPT = """You are a multilingual recipe translator. Translate the following array of recipes into {language}, and format it as structured, human readable text.

Recipes: {recipes}

Respond with the translated recipe text only, without any other words.
"""

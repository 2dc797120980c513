CATALOG_DATA = [
    {
        "name": "Green Bowl Kitchen", "cuisine": "healthy", "price_range": "$$", "location": "Old Town",
        "rating": 4.6, "health_focused": True,
        "features": ["outdoor seating", "takeaway"],
        "dietary_options": ["vegetarian", "vegan", "gluten_free"],
        "allergen_info": ["nuts", "sesame"],
        "menu": [
            {"name": "Quinoa Power Bowl", "category": "bowls", "price": 11.5, "calories": 520, "spice_level": 0,
             "preparation_time": 10, "ingredients": ["quinoa", "chickpeas", "kale", "avocado", "tahini"],
             "allergens": ["sesame"], "dietary_tags": ["vegan", "healthy", "high-protein"]},
            {"name": "Grilled Tofu Salad", "category": "salads", "price": 9.0, "calories": 410, "spice_level": 1,
             "preparation_time": 8, "ingredients": ["tofu", "mixed greens", "edamame", "ginger dressing"],
             "allergens": ["soy"], "dietary_tags": ["vegan", "light", "gluten_free"]},
            {"name": "Overnight Oats", "category": "breakfast", "price": 6.5, "calories": 350, "spice_level": 0,
             "preparation_time": 2, "ingredients": ["oats", "almond milk", "chia seeds", "berries"],
             "allergens": ["nuts"], "dietary_tags": ["vegetarian", "fresh"]},
        ],
    },
    {
        "name": "Trattoria Nonna", "cuisine": "italian", "price_range": "$$$", "location": "Riverside",
        "rating": 4.4, "health_focused": False,
        "features": ["wine bar", "reservations"],
        "dietary_options": ["vegetarian"],
        "allergen_info": ["gluten", "dairy", "eggs"],
        "menu": [
            {"name": "Margherita Pizza", "category": "pizza", "price": 12.0, "calories": 850, "spice_level": 0,
             "preparation_time": 15, "ingredients": ["flour", "tomato", "mozzarella", "basil"],
             "allergens": ["gluten", "dairy"], "dietary_tags": ["vegetarian"]},
            {"name": "Grilled Sea Bass", "category": "mains", "price": 24.0, "calories": 560, "spice_level": 0,
             "preparation_time": 20, "ingredients": ["sea bass", "lemon", "olive oil", "zucchini"],
             "allergens": ["fish"], "dietary_tags": ["gluten_free", "high-protein", "healthy"]},
            {"name": "Tiramisu", "category": "desserts", "price": 7.0, "calories": 480, "spice_level": 0,
             "preparation_time": 5, "ingredients": ["mascarpone", "espresso", "ladyfingers", "cocoa"],
             "allergens": ["gluten", "dairy", "eggs"], "dietary_tags": ["vegetarian"]},
        ],
    },
    {
        "name": "Spice Route", "cuisine": "indian", "price_range": "$$", "location": "Market Square",
        "rating": 4.3, "health_focused": False,
        "features": ["delivery", "takeaway"],
        "dietary_options": ["vegetarian", "vegan"],
        "allergen_info": ["dairy", "nuts"],
        "menu": [
            {"name": "Chana Masala", "category": "curries", "price": 10.0, "calories": 540, "spice_level": 3,
             "preparation_time": 15, "ingredients": ["chickpeas", "tomato", "onion", "garam masala"],
             "allergens": [], "dietary_tags": ["vegan", "gluten_free"]},
            {"name": "Chicken Tikka", "category": "grill", "price": 13.5, "calories": 620, "spice_level": 2,
             "preparation_time": 20, "ingredients": ["chicken", "yogurt", "spices"],
             "allergens": ["dairy"], "dietary_tags": ["high-protein", "gluten_free"]},
            {"name": "Paneer Korma", "category": "curries", "price": 11.5, "calories": 780, "spice_level": 1,
             "preparation_time": 18, "ingredients": ["paneer", "cream", "cashews", "onion"],
             "allergens": ["dairy", "nuts"], "dietary_tags": ["vegetarian"]},
        ],
    },
    {
        "name": "Pending Burger Co.", "cuisine": "american", "price_range": "$", "location": "Station Road",
        "rating": 3.9, "health_focused": False, "is_approved": False,
        "features": ["late night"],
        "dietary_options": [],
        "allergen_info": ["gluten", "dairy"],
        "menu": [
            {"name": "Double Cheeseburger", "category": "burgers", "price": 8.5, "calories": 980, "spice_level": 0,
             "preparation_time": 10, "ingredients": ["beef", "cheddar", "bun"],
             "allergens": ["gluten", "dairy"], "dietary_tags": []},
        ],
    },
]

"""Meal templates used by the deterministic plan generator.

Templates carry everything except nutrition, which the generator derives
from each slot's calorie allocation. `VEGETARIAN_TEMPLATES` is the pool for
vegetarian and vegan profiles; `FULL_TEMPLATES` appends the meat and fish
entries for everyone else. Order matters: the generator indexes pools by
`day % len(pool)`, so reordering entries changes existing plans.
"""


def _ing(name, amount, unit, calories):
    return {"name": name, "amount": amount, "unit": unit, "calories": calories}


VEGETARIAN_TEMPLATES = {
    "breakfast": [
        {"name": "Overnight Oats with Berries", "description": "Rolled oats soaked overnight with berries and chia",
         "ingredients": [_ing("Rolled oats", 50, "g", 190), _ing("Mixed berries", 80, "g", 40), _ing("Chia seeds", 10, "g", 49), _ing("Almond milk", 150, "ml", 25)],
         "instructions": ["Combine oats, chia and milk in a jar", "Refrigerate overnight", "Top with berries before serving"],
         "prep_time": 5, "cook_time": 0},
        {"name": "Avocado Toast", "description": "Whole grain toast with smashed avocado and lemon",
         "ingredients": [_ing("Whole grain bread", 2, "slices", 160), _ing("Avocado", 0.5, "medium", 120), _ing("Lemon juice", 5, "ml", 1)],
         "instructions": ["Toast the bread", "Mash avocado with lemon and salt", "Spread and season"],
         "prep_time": 5, "cook_time": 3},
        {"name": "Greek Yogurt Parfait", "description": "Layered yogurt with granola and fruit",
         "ingredients": [_ing("Greek yogurt", 200, "g", 150), _ing("Granola", 30, "g", 130), _ing("Strawberries", 80, "g", 26)],
         "instructions": ["Layer yogurt, granola and fruit in a glass"],
         "prep_time": 5, "cook_time": 0},
        {"name": "Banana Pancakes", "description": "Fluffy whole wheat pancakes with sliced banana",
         "ingredients": [_ing("Whole wheat flour", 60, "g", 204), _ing("Banana", 1, "medium", 105), _ing("Milk", 120, "ml", 60)],
         "instructions": ["Whisk flour and milk into a batter", "Fold in mashed banana", "Cook on a hot pan until golden"],
         "prep_time": 10, "cook_time": 10},
        {"name": "Smoothie Bowl", "description": "Thick fruit smoothie topped with seeds",
         "ingredients": [_ing("Frozen banana", 1, "medium", 105), _ing("Spinach", 30, "g", 7), _ing("Pumpkin seeds", 15, "g", 85)],
         "instructions": ["Blend fruit and spinach until thick", "Pour into a bowl and top with seeds"],
         "prep_time": 7, "cook_time": 0},
        {"name": "Chia Pudding", "description": "Chia seeds set in coconut milk with mango",
         "ingredients": [_ing("Chia seeds", 30, "g", 146), _ing("Coconut milk", 150, "ml", 70), _ing("Mango", 80, "g", 48)],
         "instructions": ["Stir chia into coconut milk", "Chill for at least 4 hours", "Top with diced mango"],
         "prep_time": 5, "cook_time": 0},
        {"name": "Vegetable Omelet", "description": "Two-egg omelet with peppers and spinach",
         "ingredients": [_ing("Eggs", 2, "large", 140), _ing("Bell pepper", 50, "g", 13), _ing("Spinach", 30, "g", 7)],
         "instructions": ["Whisk the eggs", "Saute the vegetables", "Pour in the eggs and fold when set"],
         "prep_time": 5, "cook_time": 8},
        {"name": "Peanut Butter Banana Toast", "description": "Whole wheat toast with peanut butter and banana",
         "ingredients": [_ing("Whole wheat bread", 2, "slices", 160), _ing("Peanut butter", 20, "g", 118), _ing("Banana", 0.5, "medium", 53)],
         "instructions": ["Toast the bread", "Spread peanut butter and layer banana slices"],
         "prep_time": 3, "cook_time": 2},
        {"name": "Savory Besan Chilla", "description": "Chickpea flour pancakes with herbs",
         "ingredients": [_ing("Chickpea flour", 50, "g", 190), _ing("Onion", 30, "g", 12), _ing("Coriander", 5, "g", 1)],
         "instructions": ["Mix flour, water and chopped vegetables into a batter", "Cook thin pancakes on both sides"],
         "prep_time": 10, "cook_time": 10},
    ],
    "lunch": [
        {"name": "Quinoa Buddha Bowl", "description": "Quinoa with roasted vegetables and tahini",
         "ingredients": [_ing("Quinoa", 80, "g", 290), _ing("Sweet potato", 100, "g", 86), _ing("Tahini", 15, "g", 89)],
         "instructions": ["Cook the quinoa", "Roast diced sweet potato", "Assemble and drizzle with tahini"],
         "prep_time": 10, "cook_time": 25},
        {"name": "Red Lentil Curry", "description": "Spiced red lentils simmered with tomato",
         "ingredients": [_ing("Red lentils", 100, "g", 350), _ing("Chopped tomatoes", 150, "g", 30), _ing("Basmati rice", 60, "g", 210)],
         "instructions": ["Fry spices and onion", "Add lentils, tomatoes and water", "Simmer until soft and serve with rice"],
         "prep_time": 15, "cook_time": 30},
        {"name": "Caprese Sandwich", "description": "Mozzarella, tomato and basil on ciabatta",
         "ingredients": [_ing("Ciabatta", 1, "roll", 250), _ing("Mozzarella", 60, "g", 170), _ing("Tomato", 1, "medium", 22)],
         "instructions": ["Slice the roll", "Layer mozzarella, tomato and basil"],
         "prep_time": 5, "cook_time": 0},
        {"name": "Mediterranean Chickpea Salad", "description": "Chickpeas with cucumber, olives and feta",
         "ingredients": [_ing("Chickpeas", 150, "g", 180), _ing("Cucumber", 100, "g", 15), _ing("Feta", 30, "g", 80)],
         "instructions": ["Rinse the chickpeas", "Chop the vegetables", "Toss everything with olive oil and lemon"],
         "prep_time": 10, "cook_time": 0},
        {"name": "Hummus Veggie Wrap", "description": "Whole wheat wrap with hummus and crunchy vegetables",
         "ingredients": [_ing("Whole wheat tortilla", 1, "large", 120), _ing("Hummus", 50, "g", 100), _ing("Carrot", 50, "g", 20)],
         "instructions": ["Spread hummus on the tortilla", "Add vegetables and roll tightly"],
         "prep_time": 8, "cook_time": 0},
        {"name": "Pasta Primavera", "description": "Whole wheat pasta with spring vegetables",
         "ingredients": [_ing("Whole wheat pasta", 80, "g", 280), _ing("Zucchini", 100, "g", 17), _ing("Peas", 50, "g", 40)],
         "instructions": ["Boil the pasta", "Saute the vegetables", "Toss together with olive oil and parmesan"],
         "prep_time": 10, "cook_time": 15},
        {"name": "Black Bean Rice Bowl", "description": "Black beans with brown rice and salsa",
         "ingredients": [_ing("Black beans", 150, "g", 200), _ing("Brown rice", 60, "g", 216), _ing("Salsa", 50, "g", 15)],
         "instructions": ["Warm the beans", "Cook the rice", "Serve topped with salsa"],
         "prep_time": 8, "cook_time": 10},
        {"name": "Baked Falafel Plate", "description": "Oven-baked falafel with tahini and salad",
         "ingredients": [_ing("Chickpeas", 120, "g", 150), _ing("Parsley", 10, "g", 4), _ing("Tahini", 15, "g", 89)],
         "instructions": ["Blend chickpeas with herbs and spices", "Shape into balls", "Bake until crisp"],
         "prep_time": 15, "cook_time": 20},
        {"name": "Paneer Tikka Bowl", "description": "Grilled paneer with peppers over rice",
         "ingredients": [_ing("Paneer", 100, "g", 265), _ing("Yogurt marinade", 50, "g", 40), _ing("Basmati rice", 60, "g", 210)],
         "instructions": ["Marinate paneer in spiced yogurt", "Grill with peppers", "Serve over rice"],
         "prep_time": 20, "cook_time": 15},
    ],
    "dinner": [
        {"name": "Stuffed Bell Peppers", "description": "Peppers filled with quinoa, beans and cheese",
         "ingredients": [_ing("Bell peppers", 2, "large", 60), _ing("Quinoa", 60, "g", 218), _ing("Kidney beans", 80, "g", 100)],
         "instructions": ["Cook the quinoa", "Mix with beans and spices", "Stuff the peppers and bake"],
         "prep_time": 20, "cook_time": 35},
        {"name": "Crispy Tofu Stir-fry", "description": "Pan-fried tofu with broccoli and soy glaze",
         "ingredients": [_ing("Firm tofu", 150, "g", 216), _ing("Broccoli", 100, "g", 34), _ing("Soy sauce", 15, "ml", 8)],
         "instructions": ["Press and cube the tofu", "Fry until golden", "Stir-fry with broccoli and glaze"],
         "prep_time": 15, "cook_time": 15},
        {"name": "Eggplant Parmesan", "description": "Baked eggplant layered with tomato and cheese",
         "ingredients": [_ing("Eggplant", 200, "g", 50), _ing("Tomato sauce", 120, "g", 40), _ing("Parmesan", 30, "g", 120)],
         "instructions": ["Slice and roast the eggplant", "Layer with sauce and cheese", "Bake until bubbling"],
         "prep_time": 20, "cook_time": 30},
        {"name": "Mushroom Risotto", "description": "Creamy arborio rice with mushrooms",
         "ingredients": [_ing("Arborio rice", 80, "g", 280), _ing("Mushrooms", 120, "g", 26), _ing("Vegetable stock", 400, "ml", 20)],
         "instructions": ["Toast the rice", "Add stock a ladle at a time while stirring", "Fold in sauteed mushrooms"],
         "prep_time": 10, "cook_time": 30},
        {"name": "Black Bean Burger", "description": "Homemade bean patty in a whole wheat bun",
         "ingredients": [_ing("Black beans", 150, "g", 200), _ing("Oats", 20, "g", 76), _ing("Whole wheat bun", 1, "bun", 140)],
         "instructions": ["Mash beans with oats and spices", "Shape patties", "Grill and serve in the bun"],
         "prep_time": 15, "cook_time": 12},
        {"name": "Spinach Lasagna", "description": "Layered pasta with spinach and ricotta",
         "ingredients": [_ing("Lasagna sheets", 100, "g", 350), _ing("Spinach", 150, "g", 35), _ing("Ricotta", 80, "g", 140)],
         "instructions": ["Wilt the spinach", "Layer sheets, ricotta and spinach", "Bake until golden"],
         "prep_time": 25, "cook_time": 40},
        {"name": "Roasted Cauliflower Tacos", "description": "Spiced cauliflower in corn tortillas",
         "ingredients": [_ing("Cauliflower", 200, "g", 50), _ing("Corn tortillas", 3, "small", 150), _ing("Lime", 0.5, "medium", 10)],
         "instructions": ["Roast spiced cauliflower", "Warm the tortillas", "Assemble with lime and herbs"],
         "prep_time": 10, "cook_time": 25},
        {"name": "Vegetable Biryani", "description": "Fragrant rice layered with vegetables",
         "ingredients": [_ing("Basmati rice", 80, "g", 280), _ing("Mixed vegetables", 150, "g", 75), _ing("Yogurt", 50, "g", 30)],
         "instructions": ["Par-cook the rice", "Layer with spiced vegetables", "Steam covered until fluffy"],
         "prep_time": 20, "cook_time": 30},
        {"name": "Dal Tadka", "description": "Yellow lentils finished with tempered spices",
         "ingredients": [_ing("Yellow lentils", 100, "g", 340), _ing("Ghee", 10, "g", 90), _ing("Cumin seeds", 2, "g", 8)],
         "instructions": ["Boil the lentils until soft", "Temper spices in ghee", "Pour over the dal"],
         "prep_time": 10, "cook_time": 25},
    ],
    "snacks": [
        {"name": "Greek Yogurt with Walnuts", "description": "Protein-rich yogurt with a handful of nuts",
         "ingredients": [_ing("Greek yogurt", 150, "g", 100), _ing("Walnuts", 15, "g", 98)],
         "instructions": ["Top the yogurt with walnuts"],
         "prep_time": 2, "cook_time": 0},
        {"name": "Apple with Almond Butter", "description": "Sliced apple with nut butter",
         "ingredients": [_ing("Apple", 1, "medium", 95), _ing("Almond butter", 15, "g", 92)],
         "instructions": ["Slice the apple and serve with almond butter"],
         "prep_time": 3, "cook_time": 0},
        {"name": "Trail Mix", "description": "Nuts, seeds and dried fruit",
         "ingredients": [_ing("Mixed nuts", 20, "g", 120), _ing("Raisins", 15, "g", 45)],
         "instructions": ["Mix and portion"],
         "prep_time": 2, "cook_time": 0},
        {"name": "Hummus with Carrot Sticks", "description": "Chickpea dip with crunchy carrots",
         "ingredients": [_ing("Hummus", 50, "g", 100), _ing("Carrots", 100, "g", 41)],
         "instructions": ["Cut carrots into sticks and serve with hummus"],
         "prep_time": 3, "cook_time": 0},
        {"name": "Roasted Chickpeas", "description": "Crunchy paprika chickpeas",
         "ingredients": [_ing("Chickpeas", 80, "g", 130), _ing("Olive oil", 5, "ml", 40)],
         "instructions": ["Toss chickpeas with oil and paprika", "Roast until crunchy"],
         "prep_time": 5, "cook_time": 25},
    ],
}

MEAT_AND_FISH_TEMPLATES = {
    "breakfast": [
        {"name": "Scrambled Eggs with Turkey Bacon", "description": "Soft scrambled eggs with crisp turkey bacon",
         "ingredients": [_ing("Eggs", 2, "large", 140), _ing("Turkey bacon", 2, "slices", 70)],
         "instructions": ["Crisp the bacon", "Scramble the eggs gently", "Serve together"],
         "prep_time": 5, "cook_time": 8},
        {"name": "Smoked Salmon Bagel", "description": "Whole grain bagel with smoked salmon and cream cheese",
         "ingredients": [_ing("Whole grain bagel", 1, "bagel", 250), _ing("Smoked salmon", 50, "g", 60), _ing("Cream cheese", 20, "g", 70)],
         "instructions": ["Toast the bagel", "Spread cream cheese and top with salmon"],
         "prep_time": 5, "cook_time": 2},
    ],
    "lunch": [
        {"name": "Grilled Chicken Salad", "description": "Mixed greens with sliced grilled chicken",
         "ingredients": [_ing("Chicken breast", 120, "g", 198), _ing("Mixed greens", 80, "g", 16), _ing("Olive oil", 10, "ml", 80)],
         "instructions": ["Grill the chicken", "Slice and toss with greens and dressing"],
         "prep_time": 10, "cook_time": 15},
        {"name": "Turkey Club Sandwich", "description": "Whole grain sandwich with roast turkey",
         "ingredients": [_ing("Whole grain bread", 2, "slices", 160), _ing("Roast turkey", 100, "g", 120), _ing("Lettuce", 20, "g", 3)],
         "instructions": ["Toast the bread", "Layer turkey, lettuce and tomato"],
         "prep_time": 5, "cook_time": 0},
        {"name": "Beef Burrito Bowl", "description": "Seasoned lean beef with rice and beans",
         "ingredients": [_ing("Lean ground beef", 100, "g", 250), _ing("Brown rice", 60, "g", 216), _ing("Pinto beans", 60, "g", 80)],
         "instructions": ["Brown the beef with spices", "Cook the rice", "Assemble the bowl"],
         "prep_time": 10, "cook_time": 15},
        {"name": "Tuna Nicoise Salad", "description": "Tuna with potatoes, beans and egg",
         "ingredients": [_ing("Tuna", 100, "g", 130), _ing("New potatoes", 100, "g", 77), _ing("Green beans", 60, "g", 19)],
         "instructions": ["Boil potatoes and beans", "Arrange with tuna and egg", "Dress with vinaigrette"],
         "prep_time": 10, "cook_time": 15},
    ],
    "dinner": [
        {"name": "Herb-Crusted Baked Salmon", "description": "Salmon fillet with a herb crust",
         "ingredients": [_ing("Salmon fillet", 150, "g", 280), _ing("Breadcrumbs", 15, "g", 60), _ing("Asparagus", 100, "g", 20)],
         "instructions": ["Press herbs and crumbs onto the salmon", "Bake with asparagus"],
         "prep_time": 10, "cook_time": 25},
        {"name": "Lemon Grilled Chicken", "description": "Marinated chicken breast with roasted vegetables",
         "ingredients": [_ing("Chicken breast", 150, "g", 248), _ing("Zucchini", 100, "g", 17), _ing("Lemon", 0.5, "medium", 10)],
         "instructions": ["Marinate chicken in lemon and herbs", "Grill alongside the vegetables"],
         "prep_time": 15, "cook_time": 20},
        {"name": "Beef and Broccoli Stir-fry", "description": "Lean beef strips with broccoli",
         "ingredients": [_ing("Lean beef", 120, "g", 220), _ing("Broccoli", 120, "g", 41), _ing("Ginger", 5, "g", 4)],
         "instructions": ["Sear the beef", "Stir-fry broccoli with ginger", "Combine with sauce"],
         "prep_time": 10, "cook_time": 12},
        {"name": "Grilled Fish Tacos", "description": "White fish in corn tortillas with slaw",
         "ingredients": [_ing("White fish", 120, "g", 140), _ing("Corn tortillas", 2, "small", 100), _ing("Cabbage slaw", 60, "g", 20)],
         "instructions": ["Season and grill the fish", "Assemble tacos with slaw"],
         "prep_time": 10, "cook_time": 10},
        {"name": "Garlic Shrimp Linguine", "description": "Shrimp tossed with garlic and linguine",
         "ingredients": [_ing("Shrimp", 150, "g", 120), _ing("Linguine", 80, "g", 280), _ing("Garlic", 10, "g", 15)],
         "instructions": ["Boil the linguine", "Saute shrimp with garlic", "Toss together"],
         "prep_time": 10, "cook_time": 15},
    ],
    "snacks": [
        {"name": "Beef Jerky", "description": "High-protein dried beef",
         "ingredients": [_ing("Beef jerky", 30, "g", 80)],
         "instructions": ["Serve"],
         "prep_time": 1, "cook_time": 0},
        {"name": "Hard-Boiled Eggs", "description": "Two eggs with a pinch of salt",
         "ingredients": [_ing("Eggs", 2, "large", 140)],
         "instructions": ["Boil for 10 minutes", "Cool and peel"],
         "prep_time": 2, "cook_time": 10},
    ],
}

FULL_TEMPLATES = {
    slot: VEGETARIAN_TEMPLATES[slot] + MEAT_AND_FISH_TEMPLATES[slot]
    for slot in VEGETARIAN_TEMPLATES
}

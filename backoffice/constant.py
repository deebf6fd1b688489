"""Editable static accounts, sample menu and sample orders."""

from __future__ import annotations

# Mock sign-in table; not a security boundary.
ACCOUNT_RECORDS: list[dict[str, str]] = [
    {"id": "1", "email": "admin@restaurant.com", "password": "admin123", "name": "Admin User", "role": "admin"},
    {"id": "2", "email": "staff@restaurant.com", "password": "staff123", "name": "Staff User", "role": "staff"},
]

MENU_ITEM_RECORDS: list[dict[str, object]] = [
    {
        "id": "1",
        "name": "Margherita Pizza",
        "category": "Pizza",
        "price": "12.99",
        "description": "Classic tomato sauce, fresh mozzarella and basil on a thin crust",
        "tags": ["vegetarian", "popular"],
        "available": True,
        "ingredients": ["tomato", "mozzarella", "basil", "olive oil"],
    },
    {
        "id": "2",
        "name": "Caesar Salad",
        "category": "Salads",
        "price": "9.99",
        "description": "Crisp romaine, parmesan, croutons and house caesar dressing",
        "tags": ["popular"],
        "available": True,
        "ingredients": ["romaine", "parmesan", "croutons", "caesar dressing"],
    },
    {
        "id": "3",
        "name": "Vegan Buddha Bowl",
        "category": "Bowls",
        "price": "11.99",
        "description": "Quinoa, roasted chickpeas, avocado and greens with tahini",
        "tags": ["vegan", "gluten-free"],
        "available": True,
        "ingredients": ["quinoa", "chickpeas", "avocado", "spinach", "tahini"],
    },
    {
        "id": "4",
        "name": "Garlic Bread",
        "category": "Sides",
        "price": "4.99",
        "description": "Toasted baguette with garlic butter and parsley",
        "tags": ["vegetarian"],
        "available": True,
        "ingredients": ["baguette", "garlic", "butter", "parsley"],
    },
    {
        "id": "5",
        "name": "Chicken Wings",
        "category": "Appetizers",
        "price": "14.99",
        "description": "Crispy wings tossed in buffalo sauce with blue cheese dip",
        "tags": ["spicy"],
        "available": False,
        "ingredients": ["chicken wings", "buffalo sauce", "blue cheese"],
    },
]

# Orders are seeded relative to app start.
ORDER_RECORDS: list[dict[str, object]] = [
    {
        "id": "ORD-001",
        "customer_name": "John Doe",
        "items": [
            {"id": "1", "name": "Margherita Pizza", "quantity": 2, "unit_price": "12.99", "customizations": ["extra cheese"]},
            {"id": "2", "name": "Caesar Salad", "quantity": 1, "unit_price": "9.99", "customizations": []},
        ],
        "status": "preparing",
        "minutes_ago": 15,
        "notes": "Please make pizza extra crispy",
    },
    {
        "id": "ORD-002",
        "customer_name": "Jane Smith",
        "items": [
            {"id": "3", "name": "Vegan Buddha Bowl", "quantity": 1, "unit_price": "11.99", "customizations": ["no tahini"]},
        ],
        "status": "ready",
        "minutes_ago": 30,
        "notes": "",
    },
    {
        "id": "ORD-003",
        "customer_name": "Bob Johnson",
        "items": [
            {"id": "1", "name": "Margherita Pizza", "quantity": 1, "unit_price": "12.99", "customizations": []},
            {"id": "4", "name": "Garlic Bread", "quantity": 2, "unit_price": "4.99", "customizations": []},
        ],
        "status": "delivered",
        "minutes_ago": 60,
        "notes": "",
    },
]

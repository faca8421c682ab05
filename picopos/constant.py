"""Editable static menu, floor plan and store profile seed data."""

from __future__ import annotations

CATEGORY_LABELS: dict[str, str] = {
    "coffee": "Coffee",
    "beverage": "Beverage",
    "dessert": "Dessert",
    "meal": "Meal",
}

CURRENCIES: tuple[str, ...] = ("USD", "KRW", "NPR", "EUR")

LOGO_ICONS: tuple[str, ...] = ("coffee", "mountain", "cloud")

DEFAULT_ITEM_COLOR = "bg-indigo-100"
DEFAULT_ITEM_IMAGE = "https://images.unsplash.com/photo-1551024709-8f23befc6f87?auto=format&fit=crop&w=600&q=80"

# Prices and costs are strings so they load into Decimal without float noise.
MENU_SEED: list[dict[str, str | int]] = [
    {
        "id": "1",
        "name": "Americano",
        "category": "coffee",
        "price": "3.50",
        "cost": "0.80",
        "stock": 100,
        "color": "bg-amber-800",
        "image": "https://images.unsplash.com/photo-1509042239860-f550ce710b93?auto=format&fit=crop&w=600&q=80",
    },
    {
        "id": "2",
        "name": "Cafe Latte",
        "category": "coffee",
        "price": "4.50",
        "cost": "1.20",
        "stock": 80,
        "color": "bg-amber-100",
        "image": "https://images.unsplash.com/photo-1561047029-3000c68339ca?auto=format&fit=crop&w=600&q=80",
    },
    {
        "id": "3",
        "name": "Cappuccino",
        "category": "coffee",
        "price": "4.50",
        "cost": "1.20",
        "stock": 50,
        "color": "bg-amber-100",
        "image": "https://images.unsplash.com/photo-1572442388796-11668a67e53d?auto=format&fit=crop&w=600&q=80",
    },
    {
        "id": "4",
        "name": "Vanilla Latte",
        "category": "coffee",
        "price": "5.00",
        "cost": "1.50",
        "stock": 40,
        "color": "bg-amber-100",
        "image": "https://images.unsplash.com/photo-1541167760496-1628856ab772?auto=format&fit=crop&w=600&q=80",
    },
    {
        "id": "5",
        "name": "Lemonade",
        "category": "beverage",
        "price": "4.00",
        "cost": "0.50",
        "stock": 30,
        "color": "bg-yellow-200",
        "image": "https://images.unsplash.com/photo-1513558161293-cdaf765ed2fd?auto=format&fit=crop&w=600&q=80",
    },
    {
        "id": "6",
        "name": "Mint Mojito",
        "category": "beverage",
        "price": "5.50",
        "cost": "1.00",
        "stock": 25,
        "color": "bg-green-200",
        "image": "https://images.unsplash.com/photo-1621263764928-df1444c5e859?auto=format&fit=crop&w=600&q=80",
    },
    {
        "id": "7",
        "name": "Chocolate Cake",
        "category": "dessert",
        "price": "6.50",
        "cost": "2.00",
        "stock": 10,
        "color": "bg-brown-400",
        "image": "https://images.unsplash.com/photo-1578985545062-69928b1d9587?auto=format&fit=crop&w=600&q=80",
    },
    {
        "id": "8",
        "name": "Cheese Cake",
        "category": "dessert",
        "price": "7.00",
        "cost": "2.50",
        "stock": 0,
        "color": "bg-yellow-100",
        "image": "https://images.unsplash.com/photo-1533134242443-d4fd215305ad?auto=format&fit=crop&w=600&q=80",
    },
    {
        "id": "9",
        "name": "Club Sandwich",
        "category": "meal",
        "price": "12.00",
        "cost": "4.00",
        "stock": 20,
        "color": "bg-green-100",
        "image": "https://images.unsplash.com/photo-1528735602780-2552fd46c7af?auto=format&fit=crop&w=600&q=80",
    },
]

# Coordinates are percentages of the floor area.
TABLE_SEED: list[tuple[int, str, float, float]] = [
    (1, "T-1", 5, 5),
    (2, "T-2", 25, 5),
    (3, "T-3", 45, 5),
    (4, "T-4", 5, 30),
    (5, "T-5", 25, 30),
    (6, "T-6", 45, 30),
    (7, "VIP-1", 70, 5),
    (8, "VIP-2", 70, 30),
    (9, "W-1", 5, 60),
    (10, "W-2", 25, 60),
    (11, "W-3", 45, 60),
    (12, "Patio", 70, 60),
]

PROFILE_PRESETS: dict[str, dict[str, str | int]] = {
    "demo": {
        "name": "Blue Bottle Demo",
        "location": "Gangnam, Seoul",
        "currency": "KRW",
        "tax_rate": 10,
        "pan_number": "123-456-7890",
        "settlement_account": "KR-BANK-001",
        "logo_icon": "coffee",
        "theme_color": "bg-indigo-900",
    },
    "default": {
        "name": "Pico Cafe",
        "location": "Global Branch",
        "currency": "USD",
        "tax_rate": 8,
        "pan_number": "987-654-321",
        "settlement_account": "US-BANK-999",
        "logo_icon": "cloud",
        "theme_color": "bg-indigo-600",
    },
}

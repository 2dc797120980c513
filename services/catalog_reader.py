"""Read-only projections of the restaurant and menu catalog.

The catalog belongs to the wider marketplace. This reader only applies the
eligibility filters the recommender needs and decodes list columns; it does
no caching of its own.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from core.logger import get_logger
from core.repository import load_list
from database import models
from schemas.recommendation_schema import MenuItemDetail, RestaurantDetail

logger = get_logger("services.catalog_reader")


def restaurant_to_detail(r: models.Restaurant) -> RestaurantDetail:
    return RestaurantDetail(
        id=r.id,
        name=r.name,
        cuisine=r.cuisine,
        price_range=r.price_range,
        location=r.location,
        rating=r.rating,
        features=load_list(r.features),
        dietary_options=load_list(r.dietary_options),
        allergen_info=load_list(r.allergen_info),
        health_focused=bool(r.health_focused),
    )


def menu_item_to_detail(m: models.MenuItem, restaurant: Optional[models.Restaurant] = None) -> MenuItemDetail:
    return MenuItemDetail(
        id=m.id,
        restaurant_id=m.restaurant_id,
        name=m.name,
        description=m.description,
        category=m.category,
        price=m.price,
        ingredients=load_list(m.ingredients),
        allergens=load_list(m.allergens),
        dietary_tags=load_list(m.dietary_tags),
        spice_level=m.spice_level,
        calories=m.calories,
        preparation_time=m.preparation_time,
        is_available=m.is_available is not False,
        restaurant_name=restaurant.name if restaurant else None,
        restaurant_cuisine=restaurant.cuisine if restaurant else None,
        restaurant_location=restaurant.location if restaurant else None,
        restaurant_rating=restaurant.rating if restaurant else None,
    )


class CatalogReader:
    """Eligible restaurants and menu items, plus single-row detail lookups."""

    def __init__(self, session: Session):
        self.session = session

    def list_eligible_restaurants(self) -> List[RestaurantDetail]:
        """Restaurants that are both active and approved."""
        rows = (
            self.session.query(models.Restaurant)
            .filter(models.Restaurant.is_active.is_(True), models.Restaurant.is_approved.is_(True))
            .order_by(models.Restaurant.id)
            .all()
        )
        return [restaurant_to_detail(r) for r in rows]

    def list_eligible_menu_items(self) -> List[MenuItemDetail]:
        """Available menu items whose restaurant is active and approved."""
        rows = (
            self.session.query(models.MenuItem, models.Restaurant)
            .join(models.Restaurant, models.MenuItem.restaurant_id == models.Restaurant.id)
            .filter(
                models.MenuItem.is_available.is_(True),
                models.Restaurant.is_active.is_(True),
                models.Restaurant.is_approved.is_(True),
            )
            .order_by(models.MenuItem.id)
            .all()
        )
        return [menu_item_to_detail(m, r) for m, r in rows]

    def get_restaurant(self, restaurant_id: int) -> Optional[RestaurantDetail]:
        r = self.session.get(models.Restaurant, restaurant_id)
        return restaurant_to_detail(r) if r else None

    def get_menu_item(self, menu_item_id: int) -> Optional[MenuItemDetail]:
        m = self.session.get(models.MenuItem, menu_item_id)
        if m is None:
            return None
        restaurant = self.session.get(models.Restaurant, m.restaurant_id) if m.restaurant_id else None
        return menu_item_to_detail(m, restaurant)

    def list_menu_items_for_restaurant(self, restaurant_id: int) -> List[MenuItemDetail]:
        """Available menu items of one restaurant, in catalog order."""
        rows = (
            self.session.query(models.MenuItem)
            .filter(models.MenuItem.restaurant_id == restaurant_id, models.MenuItem.is_available.isnot(False))
            .order_by(models.MenuItem.id)
            .all()
        )
        return [menu_item_to_detail(m) for m in rows]

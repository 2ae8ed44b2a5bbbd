from __future__ import annotations

import random
from decimal import Decimal
from typing import Iterable

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from modules.agents.constants import AgentStatus
from modules.agents.models import DeliveryAgent
from modules.carts.models import Cart, CartItem
from modules.catalog.models import MenuItem, Restaurant
from modules.customers.models import Customer


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    @transaction.atomic
    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        customers = self._seed_customers()
        restaurants = self._seed_restaurants()
        agents = self._seed_agents()
        carts_created = self._seed_carts(customers, restaurants)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"customers={len(customers)}, "
                f"restaurants={len(restaurants)}, "
                f"agents={len(agents)}, "
                f"carts={carts_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        return created

    def _seed_customers(self) -> list[Customer]:
        self.stdout.write("Creating customers...")
        customers: list[Customer] = []
        seed_customers = [
            ("Aarav Sharma", "aarav@example.com", "9810000001", "12 MG Road, Bengaluru"),
            ("Diya Patel", "diya@example.com", "9810000002", "4 Marine Drive, Mumbai"),
            ("Kabir Singh", "kabir@example.com", "9810000003", "88 Park Street, Kolkata"),
            ("Meera Iyer", "meera@example.com", "9810000004", "7 Anna Salai, Chennai"),
            ("Rohan Gupta", "rohan@example.com", "9810000005", "21 Connaught Place, Delhi"),
        ]
        for name, email, phone, address in seed_customers:
            customer, _ = Customer.objects.get_or_create(
                email=email,
                defaults={"name": name, "phone": phone, "address": address},
            )
            customers.append(customer)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return customers

    def _seed_restaurants(self) -> list[Restaurant]:
        self.stdout.write("Creating restaurants...")
        restaurants: list[Restaurant] = []
        catalog = {
            ("Spice Route", "5 Brigade Road, Bengaluru"): [
                ("Paneer Tikka", Decimal("249.00")),
                ("Butter Naan", Decimal("49.00")),
                ("Dal Makhani", Decimal("199.00")),
            ],
            ("Coastal Kitchen", "10 Juhu Beach, Mumbai"): [
                ("Fish Curry", Decimal("329.00")),
                ("Neer Dosa", Decimal("89.00")),
                ("Prawn Fry", Decimal("379.00")),
            ],
            ("Chaat Corner", "3 Chandni Chowk, Delhi"): [
                ("Pani Puri", Decimal("60.00")),
                ("Aloo Tikki", Decimal("80.00")),
                ("Lassi", Decimal("70.00")),
            ],
        }
        for (name, address), items in catalog.items():
            restaurant, _ = Restaurant.objects.get_or_create(
                name=name, defaults={"address": address}
            )
            for item_name, price in items:
                MenuItem.objects.get_or_create(
                    restaurant=restaurant,
                    name=item_name,
                    defaults={
                        "price": price,
                        "image_url": f"/images/{item_name.lower().replace(' ', '-')}.jpg",
                    },
                )
            restaurants.append(restaurant)
        self.stdout.write(self.style.SUCCESS("Creating restaurants... Done!"))
        return restaurants

    def _seed_agents(self) -> list[DeliveryAgent]:
        self.stdout.write("Creating delivery agents...")
        agents: list[DeliveryAgent] = []
        for index in range(1, 6):
            agent, _ = DeliveryAgent.objects.get_or_create(
                agent_code=f"AG-{index:03d}",
                defaults={
                    "name": f"Agent {index}",
                    "email": f"agent{index}@example.com",
                    "phone": f"98200000{index:02d}",
                    "status": AgentStatus.AVAILABLE,
                    "total_deliveries": 0,
                    "total_earnings": Decimal("0.00"),
                    "todays_earning": Decimal("0.00"),
                    "rating": Decimal(str(round(random.uniform(3.8, 5.0), 1))),
                },
            )
            agents.append(agent)
        self.stdout.write(self.style.SUCCESS("Creating delivery agents... Done!"))
        return agents

    def _seed_carts(
        self, customers: Iterable[Customer], restaurants: list[Restaurant]
    ) -> int:
        self.stdout.write("Creating carts...")
        if not restaurants:
            self.stdout.write(self.style.WARNING("Skipping carts (no restaurants)."))
            return 0

        carts_created = 0
        for customer in customers:
            restaurant = random.choice(restaurants)
            cart, created = Cart.objects.get_or_create(
                customer=customer, defaults={"restaurant": restaurant}
            )
            if not created:
                continue
            menu = list(cart.restaurant.menu_items.all())
            for menu_item in random.sample(menu, k=min(2, len(menu))):
                CartItem.objects.create(
                    cart=cart,
                    menu_item_id=menu_item.id,
                    name=menu_item.name,
                    price=menu_item.price,
                    quantity=random.randint(1, 3),
                    image_url=menu_item.image_url,
                )
            carts_created += 1

        self.stdout.write(self.style.SUCCESS("Creating carts... Done!"))
        return carts_created

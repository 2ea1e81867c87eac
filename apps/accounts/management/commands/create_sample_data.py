"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 1 back-office admin and 3 business accounts (amaka, tunde, zainab)
- Business profiles with storefront slugs
- Price lists for each storefront
- Receipts spread over the last two weeks
- Page views for the admin activity charts
"""

import random
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User, Profile
from apps.accounts.services import update_business_profile
from apps.analytics.models import SiteActivity
from apps.analytics.tracking import record_page_view
from apps.receipts.models import Receipt, PaymentMethod, ReceiptStatus
from apps.receipts.services import create_receipt
from apps.storefront.models import MenuItem
from apps.storefront.services import create_menu_item


BUSINESSES = {
    'amaka@example.com': {
        'display_name': 'Amaka Obi',
        'profile': {
            'business_name': 'Mama Put Kitchen',
            'business_phone': '0803 123 4567',
            'tagline': 'Home-cooked meals, served hot',
            'theme_color': '#16a34a',
            'slug': 'mama-put',
        },
        'menu': [
            ('Jollof Rice', '1500', 'Smoky party jollof with plantain'),
            ('Pounded Yam & Egusi', '2500', ''),
            ('Chapman', '800', 'Chilled'),
        ],
    },
    'tunde@example.com': {
        'display_name': 'Tunde Bakare',
        'profile': {
            'business_name': 'Tunde Prints',
            'business_phone': '0812 555 0101',
            'tagline': 'Banners, flyers and business cards',
            'theme_color': '#1d4ed8',
            'slug': 'tunde-prints',
        },
        'menu': [
            ('A5 Flyers (100)', '12000', 'Full colour, gloss'),
            ('Business Cards (50)', '7500', ''),
        ],
    },
    'zainab@example.com': {
        'display_name': 'Zainab Musa',
        'profile': {
            'business_name': 'My Business',
        },
        'menu': [],
    },
}

CUSTOMERS = ['Chidi Eze', 'Bola Ade', 'Ngozi Okafor', '', 'Ifeanyi Nwosu', 'Kemi Alade']

PATHS = ['/', '/dashboard', '/generate', '/history', '/settings', '/m/mama-put']


class Command(BaseCommand):
    help = 'Create sample data for trying out the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        self.create_menus(users)
        self.create_receipts(users)
        self.create_site_activity(users)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@example.com / admin123 (back-office)')
        for email in BUSINESSES:
            self.stdout.write(f'  {email} / password123')

    def clear_data(self):
        """Clear all sample data from the database."""
        SiteActivity.objects.all().delete()
        Receipt.objects.all().delete()
        MenuItem.objects.all().delete()
        User.objects.filter(email__in=list(BUSINESSES) + ['admin@example.com']).delete()

    def create_users(self):
        """Create accounts and their business profiles."""
        self.stdout.write('  Creating users...')

        admin, _ = User.objects.get_or_create(
            email='admin@example.com',
            defaults={
                'display_name': 'Back Office',
                'is_staff': True,
                'is_superuser': True,
            }
        )
        admin.set_password('admin123')
        admin.save()
        Profile.objects.update_or_create(
            user=admin,
            defaults={'business_name': 'MifimnPay', 'is_admin': True},
        )

        users = {}
        for email, data in BUSINESSES.items():
            user, _ = User.objects.get_or_create(
                email=email,
                defaults={'display_name': data['display_name']}
            )
            user.set_password('password123')
            user.save()
            Profile.objects.get_or_create(user=user)
            update_business_profile(user=user, **data['profile'])
            users[email] = user

        return users

    def create_menus(self, users):
        """Create storefront price lists."""
        self.stdout.write('  Creating price lists...')

        for email, user in users.items():
            if MenuItem.objects.filter(user=user).exists():
                continue
            for name, price, description in BUSINESSES[email]['menu']:
                create_menu_item(user=user, name=name, price=price, description=description)

    def create_receipts(self, users):
        """Create receipts and backdate them over the last two weeks."""
        self.stdout.write('  Creating receipts...')

        now = timezone.now()
        for email, user in users.items():
            menu = BUSINESSES[email]['menu']
            if not menu or Receipt.objects.filter(user=user).exists():
                continue

            for day in range(14, -1, -1):
                for _ in range(random.randint(0, 3)):
                    name, price, _description = random.choice(menu)
                    receipt = create_receipt(
                        user=user,
                        items=[{'name': name, 'qty': random.randint(1, 4), 'price': price}],
                        customer_name=random.choice(CUSTOMERS),
                        shipping=random.choice([0, 0, 500]),
                        payment_method=random.choice(PaymentMethod.values),
                        status=random.choice([ReceiptStatus.PAID, ReceiptStatus.PAID, ReceiptStatus.PENDING]),
                    )
                    created_at = now - timedelta(days=day, hours=random.randint(0, 10))
                    Receipt.objects.filter(id=receipt.id).update(created_at=created_at)

    def create_site_activity(self, users):
        """Create page views for the admin activity charts."""
        self.stdout.write('  Creating site activity...')

        if SiteActivity.objects.exists():
            return

        now = timezone.now()
        visitors = list(users.values()) + [None]
        for day in range(7):
            for _ in range(random.randint(5, 20)):
                at = now - timedelta(days=day, minutes=random.randint(0, 600))
                record_page_view(random.choice(visitors), random.choice(PATHS), at=at)

import os

import django

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'automata_site.settings')
django.setup()

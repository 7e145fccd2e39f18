"""
Catalogue livré par défaut (e-books et bundles).
Les fichiers doivent exister sous DOWNLOADS_DIR avec exactement ces noms.
"""

PRODUCTS = {
    # Série ventes
    "ebook-sdr": {"name": "SDR Success Playbook", "price": 69, "file": "sdr-success-playbook.pdf"},
    "ebook-bdm": {"name": "Business Development Playbook", "price": 69, "file": "bdm-playbook.pdf"},
    "ebook-am": {"name": "Account Manager Playbook", "price": 69, "file": "am-playbook.pdf"},
    # Formation ventes
    "ebook-cold-calls": {"name": "Mastering Cold Calls – Full Guide", "price": 29, "file": "mastering-cold-calls.pdf"},
    # Coaching
    "ebook-coaching": {"name": "Unlocking Your Potential – Coaching Guide", "price": 29, "file": "coaching-guide.pdf"},
    # Fitness
    "ebook-fitness": {"name": "Revitalise Your Life – Full Guide", "price": 29, "file": "fitness-guide.pdf"},
    # Recrutement
    "ebook-recruitment": {
        "name": "Building Your Personal Brand – Full Guide",
        "price": 29,
        "file": "building-your-personal-brand-a-recruitment-advantage Full paid.pdf",
    },
}

BUNDLES = {
    "sales-series": {
        "name": "Sales Excellence Series (3 Books)",
        "price": 109,
        "items": ["ebook-sdr", "ebook-bdm", "ebook-am"],
        "file": "sales-excellence-series.zip",
    },
    "complete-bundle": {
        "name": "Complete Resource Bundle (7 Books)",
        "price": 171,
        "items": list(PRODUCTS.keys()),
        "file": "complete-resource-bundle.zip",
    },
}

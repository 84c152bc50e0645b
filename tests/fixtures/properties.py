"""Property record fixtures in stored (camelCase JSON) form."""


def villa_published() -> dict:
    """Published rental villa with translated content and one booked unit."""
    return {
        "id": "villa_x",
        "name": {"en": "Villa X", "fr": "Villa X (fr)", "el": "Βίλα Χ"},
        "status": "rental",
        "archived": False,
        "version": "20240101120000",
        "isPublished": True,
        "summary": {"en": "Sea views", "fr": "Vue mer"},
        "heroImages": [{"src": "/data/properties/villa_x/hero.jpg", "alt": {"en": "Terrace", "fr": "Terrasse"}}],
        "pages": [
            {"id": "gallery", "title": {"en": "Gallery", "fr": "Galerie"}, "showSectionsSubmenu": True},
            {"id": "  ", "title": "Untitled"},
        ],
        "externalLinks": [{"url": "https://example.com", "label": {"en": "Website"}}],
        "location": {"address": {"en": "Kassiopi, Corfu", "el": "Κασσιόπη"}},
        "facilities": [
            {"title": {"en": "Outdoors", "fr": "Extérieur"}, "icon": "solid:sun", "items": [{"text": {"en": "Pool"}}]}
        ],
        "pdfs": [],
        "themeName": "Sea",
        "rental": {
            "name": "Main house",
            "bookings": [
                {
                    "bookingId": "AB-123",
                    "dateOfBooking": "2024-01-05",
                    "names": "Maria Papadopoulou",
                    "preferredLanguage": "el",
                    "repeatVisit": "Yes",
                    "hasArrived": "Yes",
                }
            ],
            "rates": [{"season": "High", "pricePerWeek": "3000"}],
            "conditions": ["No smoking"],
        },
        "guestInfo": {"wifiNetworkName": "VillaX", "wifiPassword": "sunshine"},
        "listingLanguages": ["en", "fr", "el"],
    }


def sale_property() -> dict:
    """Unversioned sale property, as written by hand before versioning existed."""
    return {
        "id": "house_y",
        "name": "House Y",
        "status": "sale",
        "pages": [],
        "salesParticulars": {"price": "450000", "documents": []},
    }

"""
Initial design catalogue: styles, rooms, flooring, colours, presets and furniture.

Seeded into the content tables when they are empty and served as-is when
the database cannot be read. Labels are shown to users in Azerbaijani;
`value` fields match the enums in podmayak.schemas.renovation.
"""

INITIAL_STYLES = [
    {"id": "modern", "label": "Müasir", "value": "Modern"},
    {"id": "industrial", "label": "Loft / Sənaye", "value": "Industrial"},
    {"id": "bohemian", "label": "Bohem", "value": "Bohemian"},
    {"id": "classic", "label": "Klassik", "value": "Classic"},
    {"id": "minimalist", "label": "Minimalist", "value": "Minimalist"},
    {"id": "scandinavian", "label": "Skandinaviya", "value": "Scandinavian"},
    {"id": "luxury", "label": "Lüks", "value": "Luxury"},
    {"id": "neoclassic", "label": "Neoklassik", "value": "Neoclassic"},
    {"id": "art_deco", "label": "Art Deco", "value": "Art Deco"},
    {"id": "mediterranean", "label": "Aralıq Dənizi", "value": "Mediterranean"},
    {"id": "japandi", "label": "Japandi / Zen", "value": "Japandi"},
    {"id": "cyberpunk", "label": "Kiberpank", "value": "Cyberpunk"},
    {"id": "farmhouse", "label": "Kənd Evi", "value": "Farmhouse"},
    {"id": "baroque", "label": "Barokko", "value": "Baroque"},
    {"id": "steampunk", "label": "Stimpank", "value": "Steampunk"},
    {"id": "gothic", "label": "Qotik", "value": "Gothic"},
    {"id": "coastal", "label": "Sahil Evi", "value": "Coastal"},
    {"id": "rustic", "label": "Rustik", "value": "Rustic"},
]

INITIAL_ROOMS = [
    {"id": "living_room", "label": "Qonaq Otağı", "value": "Living Room"},
    {"id": "bedroom", "label": "Yataq Otağı", "value": "Bedroom"},
    {"id": "kitchen", "label": "Mətbəx", "value": "Kitchen"},
    {"id": "bathroom", "label": "Hamam", "value": "Bathroom"},
    {"id": "hallway", "label": "Dəhliz", "value": "Hallway"},
    {"id": "office", "label": "Ofis", "value": "Office"},
    {"id": "balcony", "label": "Eyvan", "value": "Balcony"},
    {"id": "dining_room", "label": "Yemək Otağı", "value": "Dining Room"},
    {"id": "gaming_room", "label": "Oyun Otağı", "value": "Gaming Room"},
    {"id": "home_gym", "label": "İdman Zalı", "value": "Home Gym"},
    {"id": "library", "label": "Kitabxana", "value": "Library"},
    {"id": "home_theater", "label": "Kino Zalı", "value": "Home Theater"},
    {"id": "attic", "label": "Mansard", "value": "Attic"},
    {"id": "basement", "label": "Zirzəmi", "value": "Basement"},
    {"id": "walk_in_closet", "label": "Qarderob Otağı", "value": "Walk-in Closet"},
    {"id": "other", "label": "Digər", "value": "Other"},
]

INITIAL_FLOORING = [
    {"id": "hardwood", "label": "Parket", "value": "Hardwood", "color_class": "bg-[#8B4513]"},
    {"id": "laminate", "label": "Laminat", "value": "Laminate", "color_class": "bg-[#D2B48C]"},
    {"id": "tile", "label": "Kafel", "value": "Tile", "color_class": "bg-[#E0E0E0]"},
    {"id": "marble", "label": "Mərmər", "value": "Marble", "color_class": "bg-[#F5F5F5]"},
    {"id": "carpet", "label": "Kavrolit", "value": "Carpet", "color_class": "bg-[#A0522D]"},
    {"id": "concrete", "label": "Beton", "value": "Concrete", "color_class": "bg-[#708090]"},
    {"id": "epoxy", "label": "Epoksi", "value": "Epoxy", "color_class": "bg-[#374151]"},
    {"id": "stone", "label": "Daş", "value": "Stone", "color_class": "bg-[#57534e]"},
]

INITIAL_COLORS = [
    {"id": "beige", "name": "Sakit Bej", "value": "Beige", "bg_class": "bg-[#E5D0B1]"},
    {"id": "grey", "name": "Boz", "value": "Grey", "bg_class": "bg-[#9CA3AF]"},
    {"id": "white", "name": "Ağ", "value": "White", "bg_class": "bg-white"},
    {"id": "black", "name": "Qara", "value": "Black", "bg_class": "bg-black"},
    {"id": "deep_blue", "name": "Dərin Okean", "value": "Deep Blue", "bg_class": "bg-[#0F4C75]"},
    {"id": "gold", "name": "Qızılı", "value": "Gold", "bg_class": "bg-[#FFD700]"},
    {"id": "terracotta", "name": "Terrakota", "value": "Terracotta", "bg_class": "bg-[#D35400]"},
    {"id": "sage_green", "name": "Adaçayı", "value": "Sage Green", "bg_class": "bg-[#8FBC8F]"},
    {"id": "dark_brown", "name": "Şokolad", "value": "Dark Brown", "bg_class": "bg-[#3E2723]"},
    {"id": "pastel_pink", "name": "Pastel Çəhrayı", "value": "Pastel Pink", "bg_class": "bg-[#FFD1DC]"},
    {"id": "navy", "name": "Göy", "value": "Navy", "bg_class": "bg-[#000080]"},
    {"id": "emerald", "name": "Zümrüd", "value": "Emerald", "bg_class": "bg-[#50C878]"},
    {"id": "lavender", "name": "Lavanda", "value": "Lavender", "bg_class": "bg-[#E6E6FA]"},
    {"id": "mint", "name": "Nanə", "value": "Mint", "bg_class": "bg-[#98FF98]"},
    {"id": "crimson", "name": "Tünd Qırmızı", "value": "Crimson", "bg_class": "bg-[#DC143C]"},
    {"id": "lemon", "name": "Limon", "value": "Lemon", "bg_class": "bg-[#FFF700]"},
    {"id": "bronze", "name": "Bürünc", "value": "Bronze", "bg_class": "bg-[#CD7F32]"},
    {"id": "silver", "name": "Gümüşü", "value": "Silver", "bg_class": "bg-[#C0C0C0]"},
    {"id": "olive", "name": "Zeytun", "value": "Olive", "bg_class": "bg-[#808000]"},
    {"id": "neon_blue", "name": "Neon Mavi", "value": "Neon Blue", "bg_class": "bg-[#1F51FF]"},
    {"id": "neon_pink", "name": "Neon Çəhrayı", "value": "Neon Pink", "bg_class": "bg-[#FF10F0]"},
    {"id": "cream", "name": "Krem", "value": "Cream", "bg_class": "bg-[#FFFDD0]"},
    {"id": "charcoal", "name": "Kömür", "value": "Charcoal", "bg_class": "bg-[#36454F]"},
    {"id": "copper", "name": "Mis", "value": "Copper", "bg_class": "bg-[#B87333]"},
]

INITIAL_PRESETS = [
    {"id": "modern_baku", "name": "Müasir Bakı", "style": "Modern", "colors": ["Beige", "Grey", "Navy"], "flooring": "Laminate", "icon": "Briefcase"},
    {"id": "scandinavian", "name": "Skandinaviya", "style": "Scandinavian", "colors": ["White", "Sage Green", "Beige"], "flooring": "Hardwood", "icon": "Coffee"},
    {"id": "loft", "name": "Loft", "style": "Industrial", "colors": ["Black", "Grey", "Terracotta"], "flooring": "Concrete", "icon": "Box"},
    {"id": "classic_luxury", "name": "Klassik Lüks", "style": "Classic", "colors": ["Gold", "Cream", "White"], "flooring": "Marble", "icon": "Sparkles"},
    {"id": "boho", "name": "Bohem", "style": "Bohemian", "colors": ["Terracotta", "Sage Green", "Beige"], "flooring": "Carpet", "icon": "Palmtree"},
    {"id": "cyberpunk", "name": "Kiberpank", "style": "Cyberpunk", "colors": ["Neon Blue", "Neon Pink", "Black"], "flooring": "Epoxy", "icon": "Zap"},
    {"id": "zen", "name": "Zen", "style": "Japandi", "colors": ["Beige", "White", "Stone"], "flooring": "Stone", "icon": "Leaf"},
]

ALL_ROOMS = "all"

INITIAL_FURNITURE = [
    # Common
    {"id": "Sofa", "label": "Divan", "icon": "Sofa", "room_types": [ALL_ROOMS]},
    {"id": "Table", "label": "Masa", "icon": "Layout", "room_types": [ALL_ROOMS]},
    {"id": "Chair", "label": "Stul", "icon": "Armchair", "room_types": [ALL_ROOMS]},
    {"id": "Lighting", "label": "İşıqlandırma", "icon": "Lamp", "room_types": [ALL_ROOMS]},
    {"id": "Rug", "label": "Xalça", "icon": "ScanLine", "room_types": [ALL_ROOMS]},
    {"id": "Plant", "label": "Bitki", "icon": "Palmtree", "room_types": [ALL_ROOMS]},
    {"id": "Curtains", "label": "Pərdə", "icon": "Grid", "room_types": [ALL_ROOMS]},
    # Living room
    {"id": "TV Unit", "label": "TV Stendi", "icon": "Tv", "room_types": ["Living Room"]},
    {"id": "Bookshelf", "label": "Kitab Rəfi", "icon": "FileText", "room_types": ["Living Room", "Office", "Library"]},
    {"id": "Fireplace", "label": "Kamin", "icon": "Sparkles", "room_types": ["Living Room"]},
    # Bedroom
    {"id": "Double Bed", "label": "İki nəfərlik Çarpayı", "icon": "Layout", "room_types": ["Bedroom"]},
    {"id": "Wardrobe", "label": "Qarderob", "icon": "Box", "room_types": ["Bedroom"]},
    {"id": "Nightstand", "label": "Tumba", "icon": "Box", "room_types": ["Bedroom"]},
    {"id": "Dressing Table", "label": "Makiyaj Masası", "icon": "Layout", "room_types": ["Bedroom"]},
    {"id": "Mirror", "label": "Güzgü", "icon": "ScanLine", "room_types": ["Bedroom", "Bathroom", "Hallway", "Walk-in Closet"]},
    # Gaming
    {"id": "Gaming Desk", "label": "Oyun Masası", "icon": "Monitor", "room_types": ["Gaming Room"]},
    {"id": "Gaming Chair", "label": "Oyun Kreslosu", "icon": "Armchair", "room_types": ["Gaming Room"]},
    {"id": "RGB Lights", "label": "RGB İşıqlar", "icon": "Zap", "room_types": ["Gaming Room"]},
    {"id": "Posters", "label": "Posterlər", "icon": "ImageIcon", "room_types": ["Gaming Room"]},
    {"id": "Shelves", "label": "Rəflər", "icon": "Grid", "room_types": ["Gaming Room", "Basement", "Walk-in Closet"]},
    {"id": "Bean Bag", "label": "Puf", "icon": "Sofa", "room_types": ["Gaming Room"]},
    # Gym
    {"id": "Treadmill", "label": "Qaçış Zolağı", "icon": "Dumbbell", "room_types": ["Home Gym"]},
    {"id": "Weights", "label": "Çəki Daşları", "icon": "Dumbbell", "room_types": ["Home Gym"]},
    {"id": "Yoga Mat", "label": "Yoqa Matı", "icon": "ScanLine", "room_types": ["Home Gym"]},
    {"id": "Mirror Wall", "label": "Güzgü Divar", "icon": "ScanLine", "room_types": ["Home Gym"]},
    {"id": "Bench", "label": "Skamya", "icon": "Layout", "room_types": ["Home Gym"]},
    # Theater
    {"id": "Projector", "label": "Proyektor", "icon": "Film", "room_types": ["Home Theater"]},
    {"id": "Recliner Seats", "label": "Kino Kresloları", "icon": "Armchair", "room_types": ["Home Theater"]},
    {"id": "Sound System", "label": "Səs Sistemi", "icon": "Zap", "room_types": ["Home Theater"]},
    {"id": "Popcorn Machine", "label": "Popkorn", "icon": "Box", "room_types": ["Home Theater"]},
    {"id": "Acoustic Panels", "label": "Akustik Panel", "icon": "Grid", "room_types": ["Home Theater"]},
    # Library
    {"id": "Large Bookshelf", "label": "Böyük Kitabxana", "icon": "Book", "room_types": ["Library"]},
    {"id": "Reading Chair", "label": "Oxu Kreslosu", "icon": "Armchair", "room_types": ["Library"]},
    {"id": "Ladder", "label": "Nərdivan", "icon": "Grid", "room_types": ["Library"]},
    {"id": "Desk", "label": "Yazı Masası", "icon": "Layout", "room_types": ["Library"]},
    {"id": "Table Lamp", "label": "Masa Lampası", "icon": "Lamp", "room_types": ["Library"]},
    # Kitchen
    {"id": "Kitchen Island", "label": "Mətbəx Adası", "icon": "Layout", "room_types": ["Kitchen"]},
    {"id": "Dining Table", "label": "Yemək Masası", "icon": "Layout", "room_types": ["Kitchen", "Dining Room"]},
    {"id": "Bar Stools", "label": "Bar Stulları", "icon": "Armchair", "room_types": ["Kitchen"]},
    {"id": "Cabinets", "label": "Dolablar", "icon": "Box", "room_types": ["Kitchen"]},
    {"id": "Fridge", "label": "Soyuducu", "icon": "Box", "room_types": ["Kitchen"]},
    # Bathroom
    {"id": "Vanity Unit", "label": "Əl-üz Yuyan", "icon": "Box", "room_types": ["Bathroom"]},
    {"id": "Bathtub", "label": "Vanna", "icon": "Box", "room_types": ["Bathroom"]},
    {"id": "Shower Cabin", "label": "Duş Kabini", "icon": "Box", "room_types": ["Bathroom"]},
    # Dining
    {"id": "Large Dining Table", "label": "Böyük Masa", "icon": "Layout", "room_types": ["Dining Room"]},
    {"id": "Chairs", "label": "Stullar", "icon": "Armchair", "room_types": ["Dining Room"]},
    {"id": "Chandelier", "label": "Çılçıraq", "icon": "Sparkles", "room_types": ["Dining Room"]},
    {"id": "Sideboard", "label": "Servant", "icon": "Box", "room_types": ["Dining Room"]},
    # Office
    {"id": "Office Desk", "label": "Yazı Masası", "icon": "Layout", "room_types": ["Office"]},
    {"id": "Ergonomic Chair", "label": "Ofis Kreslosu", "icon": "Armchair", "room_types": ["Office"]},
    # Walk-in closet
    {"id": "Shelving Unit", "label": "Rəf Sistemi", "icon": "Grid", "room_types": ["Walk-in Closet"]},
    {"id": "Island", "label": "Ada (Şkaf)", "icon": "Box", "room_types": ["Walk-in Closet"]},
    {"id": "Full Mirror", "label": "Böyük Güzgü", "icon": "ScanLine", "room_types": ["Walk-in Closet"]},
    {"id": "Hangers", "label": "Asılqanlar", "icon": "Shirt", "room_types": ["Walk-in Closet"]},
    # Hallway
    {"id": "Shoe Rack", "label": "Ayaqqabı Rəfi", "icon": "Box", "room_types": ["Hallway"]},
    {"id": "Coat Rack", "label": "Asılqan", "icon": "Grid", "room_types": ["Hallway"]},
    # Balcony
    {"id": "Outdoor Sofa", "label": "Bağ Divanı", "icon": "Sofa", "room_types": ["Balcony"]},
    {"id": "Plants", "label": "Bitkilər", "icon": "Palmtree", "room_types": ["Balcony"]},
    # Attic
    {"id": "Low Sofa", "label": "Alçaq Divan", "icon": "Sofa", "room_types": ["Attic"]},
    {"id": "Storage", "label": "Saxlama", "icon": "Box", "room_types": ["Attic"]},
    {"id": "Skylight", "label": "Dam Pəncərəsi", "icon": "Grid", "room_types": ["Attic"]},
    # Basement
    {"id": "Storage Racks", "label": "Rəflər", "icon": "Grid", "room_types": ["Basement"]},
    {"id": "Pool Table", "label": "Bilyard Masası", "icon": "Layout", "room_types": ["Basement"]},
    {"id": "Bar Area", "label": "Bar", "icon": "Coffee", "room_types": ["Basement"]},
]

# Regions offered for budget currency context
COUNTRIES = ["Azerbaijan", "Turkey", "Russia", "USA", "Germany", "UAE", "Italy", "France"]

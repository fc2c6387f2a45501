# beantrace/seed_data.py
"""
Demo data loaded at startup (SEED_DEMO_DATA=1) and the built-in sign-in
accounts. Passwords here are plain text and are hashed when the store loads.
"""

SCA_KEYS = [
    "Fragrance/Aroma", "Flavor", "Aftertaste", "Acidity", "Body",
    "Uniformity", "Balance", "Clean Cup", "Sweetness", "Overall",
]


def _flat(value):
    return {attr: value for attr in SCA_KEYS}


def _sheet(fragrance, flavor, aftertaste, acidity, body, balance, overall):
    return {
        "Fragrance/Aroma": fragrance, "Flavor": flavor, "Aftertaste": aftertaste,
        "Acidity": acidity, "Body": body, "Uniformity": 10, "Balance": balance,
        "Clean Cup": 10, "Sweetness": 10, "Overall": overall,
    }


LOGIN_ACCOUNTS = [
    {"id": "user-farmer1", "name": "Maria Rodriguez", "email": "farmer@coffee.com", "password": "farmer123", "role": "Farmer"},
    {"id": "user-processor1", "name": "Alarak", "email": "processor@coffee.com", "password": "processor123", "role": "Processor"},
    {"id": "user-roaster1", "name": "Jim Raynor", "email": "roaster@coffee.com", "password": "roaster123", "role": "Roaster"},
    {"id": "user-headjudge", "name": "Artanis", "email": "headjudge@coffee.com", "password": "headjudge123", "role": "Head Judge"},
    {"id": "user-cupper1", "name": "Tassadar", "email": "cupper@coffee.com", "password": "cupper123", "role": "Cupper"},
    {"id": "user-admin", "name": "Admin User", "email": "admin@coffee.com", "password": "admin123", "role": "Admin"},
]


DEMO_DATA = {
    "users": [
        {"id": "user-headjudge", "name": "Artanis", "role": "Head Judge"},
        {"id": "user-cupper1", "name": "Tassadar", "role": "Cupper"},
        {"id": "user-cupper2", "name": "Zeratul", "role": "Cupper"},
        {"id": "user-cupper3", "name": "Fenix", "role": "Cupper"},
        {"id": "user-roaster1", "name": "Jim Raynor", "role": "Roaster"},
        {"id": "user-processor1", "name": "Alarak", "role": "Processor"},
        {"id": "user-farmer1", "name": "Maria Rodriguez", "role": "Farmer"},
    ],
    "farms": [
        {"id": "F001", "farmerName": "Maria Rodriguez", "location": "Finca La Esmeralda, Plot A"},
        {"id": "F002", "farmerName": "John Doe", "location": "Hacienda Elida, Plot C4"},
    ],
    "harvestLots": [
        {"id": "HL001", "farmerName": "Maria Rodriguez", "cherryVariety": "Gesha", "weightKg": 150,
         "farmPlotLocation": "Finca La Esmeralda, Plot A", "harvestDate": "2025-08-15", "status": "Processing"},
        {"id": "HL002", "farmerName": "John Doe", "cherryVariety": "Caturra", "weightKg": 300,
         "farmPlotLocation": "Hacienda Elida, Plot C4", "harvestDate": "2025-08-16", "status": "Ready for Processing"},
    ],
    "processingBatches": [
        {
            "id": "PB001", "harvestLotId": "HL001", "status": "Drying", "processType": "Washed",
            "dryingStartDate": "2025-08-16",
            "dryingLog": [
                {"date": "2025-08-16", "moistureContent": 55.0, "ambientTemp": 28, "relativeHumidity": 75},
                {"date": "2025-08-17", "moistureContent": 48.5, "ambientTemp": 29, "relativeHumidity": 72},
                {"date": "2025-08-18", "moistureContent": 41.2, "ambientTemp": 30, "relativeHumidity": 68},
                {"date": "2025-08-19", "moistureContent": 35.8, "ambientTemp": 29, "relativeHumidity": 70},
            ],
        },
        {"id": "PB002", "harvestLotId": "HL002", "status": "To Process", "processType": "Natural"},
        {
            "id": "PB003", "harvestLotId": "HL001", "status": "Completed", "processType": "Honey",
            "parchmentWeightKg": 55, "moistureContent": 11.5, "baggingDate": "2025-08-25",
            "dryingStartDate": "2025-08-17", "dryingEndDate": "2025-08-25",
            "dryingLog": [
                {"date": "2025-08-17", "moistureContent": 58.0, "ambientTemp": 27, "relativeHumidity": 78},
                {"date": "2025-08-18", "moistureContent": 50.1, "ambientTemp": 28, "relativeHumidity": 75},
                {"date": "2025-08-19", "moistureContent": 42.5, "ambientTemp": 29, "relativeHumidity": 71},
                {"date": "2025-08-20", "moistureContent": 35.2, "ambientTemp": 30, "relativeHumidity": 65},
                {"date": "2025-08-21", "moistureContent": 28.9, "ambientTemp": 31, "relativeHumidity": 62},
                {"date": "2025-08-22", "moistureContent": 22.4, "ambientTemp": 30, "relativeHumidity": 64},
                {"date": "2025-08-23", "moistureContent": 17.6, "ambientTemp": 29, "relativeHumidity": 68},
                {"date": "2025-08-24", "moistureContent": 13.8, "ambientTemp": 28, "relativeHumidity": 70},
                {"date": "2025-08-25", "moistureContent": 11.5, "ambientTemp": 28, "relativeHumidity": 72},
            ],
        },
    ],
    "parchmentLots": [
        {"id": "PL001", "processingBatchId": "PB003", "harvestLotId": "HL001", "initialWeightKg": 55,
         "currentWeightKg": 55, "moistureContent": 11.5, "processType": "Honey", "status": "Hulled"},
        {
            "id": "PL002", "processingBatchId": "PB001", "harvestLotId": "HL001", "initialWeightKg": 60,
            "currentWeightKg": 59.7, "moistureContent": 11.2, "processType": "Washed", "status": "Awaiting Hulling",
            "physicalTestResults": {
                "sampleWeightGrams": 300, "greenBeanWeightGrams": 255, "greenBeanMoisture": 10.8,
                "waterActivity": 0.58, "density": 0.71, "defectCount": 2,
                "notes": "Clean, no visible issues.",
            },
        },
    ],
    "greenBeanLots": [
        {"id": "GBL001", "parchmentLotId": "PL001", "grade": "Grade A", "initialWeightKg": 45,
         "currentWeightKg": 32.5, "availabilityStatus": "Available",
         "cuppingScores": [{"sessionId": "CS001", "score": 88.5}],
         "withdrawalHistory": [{"amountKg": 2.5, "purpose": "Sample Roast", "date": "2025-09-01"}]},
        {"id": "GBL002", "parchmentLotId": "PL002", "grade": "Grade A", "initialWeightKg": 50,
         "currentWeightKg": 50, "availabilityStatus": "Available",
         "cuppingScores": [{"sessionId": "CS001", "score": 86.75}]},
    ],
    "cuppingSessions": [
        {
            "id": "CS001", "name": "National Coffee Championship 2025", "date": "2025-09-10",
            "type": "Competition", "status": "Adjudication",
            "judges": [
                {"id": "user-headjudge", "name": "Artanis", "role": "Head Judge"},
                {"id": "user-cupper1", "name": "Tassadar", "role": "Cupper"},
                {"id": "user-cupper2", "name": "Zeratul", "role": "Cupper"},
            ],
            "samples": [
                {"id": "S01", "blindCode": "650", "greenBeanLotId": "GBL001", "submitterInfo": {"name": "Maria Rodriguez"},
                 "originInfo": {"farm": "Finca La Esmeralda"}, "lotInfo": {"process": "Honey"}},
                {"id": "S02", "blindCode": "503", "greenBeanLotId": "EXT01", "submitterInfo": {"name": "External Producer"},
                 "originInfo": {"farm": "Some Other Farm"}, "lotInfo": {"process": "Natural"}},
            ],
            "scores": {
                "S01": [
                    {"judgeId": "user-cupper1", "judgeName": "Tassadar", "scores": _sheet(8.75, 8.5, 8.25, 8.75, 8.0, 8.5, 8.5),
                     "totalScore": 89.25, "notes": "Bright citrus, floral notes of jasmine. Very clean and sweet. Elegant acidity."},
                    {"judgeId": "user-cupper2", "judgeName": "Zeratul", "scores": _sheet(8.5, 8.75, 8.5, 8.5, 8.25, 8.25, 8.75),
                     "totalScore": 89.5, "notes": "Stone fruit, honey, and a hint of black tea. Silky body. Well-balanced."},
                    {"judgeId": "user-headjudge", "judgeName": "Artanis", "scores": _sheet(8.75, 8.5, 8.25, 8.75, 8.0, 8.25, 8.5),
                     "totalScore": 89, "notes": "Tropical fruit notes, papaya and mango. A very complex and satisfying cup."},
                ],
                "S02": [
                    {"judgeId": "user-cupper1", "judgeName": "Tassadar", "scores": _sheet(8.25, 8.0, 7.75, 8.0, 8.5, 8.0, 8.0),
                     "totalScore": 86.5, "notes": "Berry jam, winey notes. Full body."},
                    {"judgeId": "user-cupper2", "judgeName": "Zeratul", "scores": _sheet(8.5, 8.25, 8.0, 7.75, 8.25, 7.75, 8.25),
                     "totalScore": 86.75, "notes": "Fermented fruit, dark chocolate. A bit rustic but enjoyable."},
                ],
            },
            "finalResults": {
                "S01": {
                    "avgScores": _flat(8.5),
                    "totalScore": 89.25,
                    "finalNotes": (
                        "A consensus of bright citrus, floral jasmine, and tropical fruits like papaya and mango "
                        "characterizes this complex and satisfying cup. It presents with a silky body, elegant "
                        "acidity, and exceptional sweetness, often described as clean, balanced, and honey-like."
                    ),
                },
            },
        },
        {
            "id": "CS002", "name": "Regional Qualifiers 2025", "date": "2025-08-20",
            "type": "Competition", "status": "Scoring",
            "judges": [
                {"id": "user-headjudge", "name": "Artanis", "role": "Head Judge"},
                {"id": "user-cupper1", "name": "Tassadar", "role": "Cupper"},
                {"id": "user-cupper3", "name": "Fenix", "role": "Cupper"},
            ],
            "samples": [
                {"id": "S01", "blindCode": "A11", "greenBeanLotId": "GBL002", "submitterInfo": {"name": "John Doe"},
                 "originInfo": {"farm": "Hacienda Elida"}, "lotInfo": {"process": "Washed"}},
                {"id": "S02", "blindCode": "B22", "greenBeanLotId": "EXT02", "submitterInfo": {"name": "Another Producer"},
                 "originInfo": {"farm": "Finca Naranja"}, "lotInfo": {"process": "Natural"}},
            ],
            "scores": {
                "S01": [
                    {"judgeId": "user-cupper1", "judgeName": "Tassadar", "scores": _sheet(8.5, 8.5, 8.0, 8.25, 8.0, 8.25, 8.5),
                     "totalScore": 88, "notes": "Clean, balanced, classic washed profile."},
                ],
                "S02": [
                    {"judgeId": "user-cupper1", "judgeName": "Tassadar", "scores": _sheet(8.0, 8.25, 8.0, 8.0, 8.5, 8.0, 8.0),
                     "totalScore": 86.75, "notes": "Fruity and sweet."},
                    {"judgeId": "user-cupper3", "judgeName": "Fenix", "scores": _sheet(8.25, 8.0, 7.75, 8.0, 8.25, 8.0, 8.0),
                     "totalScore": 86.25, "notes": "Nice berry notes."},
                ],
            },
        },
        {
            "id": "CS003", "name": "Producer Expo Showcase", "date": "2025-10-01",
            "type": "Competition", "status": "Setup",
            "judges": [
                {"id": "user-headjudge", "name": "Artanis", "role": "Head Judge"},
                {"id": "user-cupper2", "name": "Zeratul", "role": "Cupper"},
            ],
            "samples": [
                {"id": "S01", "blindCode": "X99", "greenBeanLotId": "GBL001", "submitterInfo": {"name": "Maria Rodriguez"},
                 "originInfo": {"farm": "Finca La Esmeralda"}, "lotInfo": {"process": "Honey"}},
            ],
            "scores": {},
        },
        {
            "id": "CS004", "name": "Golden Bean Award 2024", "date": "2024-12-15",
            "type": "Competition", "status": "Finalized",
            "judges": [
                {"id": "user-headjudge", "name": "Artanis", "role": "Head Judge"},
                {"id": "user-cupper1", "name": "Tassadar", "role": "Cupper"},
                {"id": "user-cupper2", "name": "Zeratul", "role": "Cupper"},
            ],
            "samples": [
                {"id": "S01", "blindCode": "78A", "greenBeanLotId": "GBL001", "submitterInfo": {"name": "Maria Rodriguez"},
                 "originInfo": {"farm": "Finca La Esmeralda"}, "lotInfo": {"process": "Honey"}},
                {"id": "S02", "blindCode": "92B", "greenBeanLotId": "GBL002", "submitterInfo": {"name": "John Doe"},
                 "originInfo": {"farm": "Hacienda Elida"}, "lotInfo": {"process": "Washed"}},
            ],
            "scores": {"S01": [], "S02": []},
            "finalResults": {
                "S01": {
                    "avgScores": _flat(8.75), "totalScore": 90.50, "rank": 1,
                    "finalNotes": (
                        "An absolutely stunning coffee, with remarkable complexity and clarity. "
                        "Layers of tropical fruit, jasmine, and a honey-sweet finish."
                    ),
                },
                "S02": {
                    "avgScores": _flat(8.5), "totalScore": 88.25, "rank": 2,
                    "finalNotes": (
                        "A very clean and elegant washed coffee. Notes of citrus, green apple, "
                        "and a delicate floral quality. Crisp acidity."
                    ),
                },
            },
        },
    ],
    "gapLogs": [
        {"id": "GAP001", "farmPlotLocation": "Finca La Esmeralda, Plot A", "activityType": "Fertilizer", "date": "2025-06-15",
         "productUsed": "Organic Compost", "quantity": "200 kg", "notes": "Applied around the base of the plants."},
        {"id": "GAP002", "farmPlotLocation": "Finca La Esmeralda, Plot A", "activityType": "Pest Management", "date": "2025-07-01",
         "productUsed": "Neem Oil Solution", "quantity": "5 L", "notes": "Preventative spraying for coffee berry borer."},
        {"id": "GAP003", "farmPlotLocation": "Hacienda Elida, Plot C4", "activityType": "Water Management", "date": "2025-07-10",
         "productUsed": "Drip Irrigation", "quantity": "2 hours", "notes": "Morning irrigation cycle."},
        {"id": "GAP004", "farmPlotLocation": "Finca La Esmeralda, Plot A", "activityType": "Water Management", "date": "2025-07-12",
         "productUsed": "Drip Irrigation", "quantity": "1.5 hours", "notes": "Soil moisture was adequate."},
    ],
    "roasterInventory": [
        {"id": "RI001", "roasterId": "user-roaster1", "greenBeanLotId": "GBL001", "claimedWeightKg": 10, "remainingWeightKg": 7.5},
    ],
    "roastBatches": [
        {"id": "RB001", "roasterId": "user-roaster1", "roasterInventoryId": "RI001", "greenBeanLotId": "GBL001",
         "roastDate": "2025-09-15", "batchSizeKg": 2.5, "yieldPercentage": 85,
         "roastProfileNotes": "Medium roast profile. First crack at 9:30. Dropped at 11:15.",
         "flavorNotes": "Chocolate, Orange Peel, Brown Sugar"},
    ],
}

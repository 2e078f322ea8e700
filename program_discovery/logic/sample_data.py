"""
Sample Catalog

Built-in programs and scholarship rules for demos and tests without a
remote catalog. Records use the camelCase keys of the published catalog.
"""

from typing import List

from .catalog import load_catalog, load_scholarship_rules
from .contracts import Program, ScholarshipRule


_STANDARD_CHARGES = {"hostel": 80000, "mess": 60000, "registration": 25000}

SAMPLE_PROGRAM_RECORDS = [
    {
        "id": "btech-cse",
        "name": "B.Tech in Computer Science and Engineering",
        "code": "CSE",
        "discipline": "Engineering",
        "level": "undergraduate",
        "duration": "4 years",
        "fees": {"tuitionPerYear": 220000, "totalTuition": 880000, **_STANDARD_CHARGES,
                 "other": 15000, "total": 1060000},
        "eligibility": [
            {"type": "Academic", "description": "Minimum 60% in 10+2 with Physics, Chemistry, and Mathematics"},
            {"type": "Entrance", "description": "JEE Main / SAT / Sharda University Entrance Test"},
        ],
        "curriculum": [
            "Data Structures and Algorithms",
            "Database Management Systems",
            "Operating Systems",
            "Computer Networks",
            "Artificial Intelligence",
            "Machine Learning",
        ],
        "specializations": ["Artificial Intelligence", "Data Science", "Cyber Security", "IoT"],
        "accreditation": "NBA Accredited",
    },
    {
        "id": "btech-cse-ai",
        "name": "B.Tech CSE (Artificial Intelligence)",
        "code": "CSE-AI",
        "discipline": "Engineering",
        "level": "undergraduate",
        "duration": "4 years",
        "fees": {"tuitionPerYear": 240000, "totalTuition": 960000, **_STANDARD_CHARGES,
                 "other": 15000, "total": 1140000},
        "eligibility": [
            {"type": "Academic", "description": "Minimum 60% in 10+2 with Physics, Chemistry, and Mathematics"},
        ],
        "curriculum": ["Deep Learning", "Natural Language Processing", "Computer Vision", "Robotics"],
        "accreditation": "NBA Accredited",
    },
    {
        "id": "bcom",
        "name": "Bachelor of Commerce",
        "code": "B.Com",
        "discipline": "Commerce",
        "level": "undergraduate",
        "duration": "3 years",
        "fees": {"tuitionPerYear": 150000, "totalTuition": 450000, **_STANDARD_CHARGES,
                 "other": 10000, "total": 625000},
        "eligibility": [{"type": "Academic", "description": "Minimum 50% in 10+2 from any stream"}],
        "curriculum": ["Financial Accounting", "Business Law", "Corporate Taxation", "Auditing"],
    },
    {
        "id": "mba",
        "name": "Master of Business Administration",
        "code": "MBA",
        "discipline": "Management",
        "level": "postgraduate",
        "duration": "2 years",
        "fees": {"tuitionPerYear": 300000, "totalTuition": 600000, **_STANDARD_CHARGES,
                 "other": 15000, "total": 780000},
        "eligibility": [
            {"type": "Academic", "description": "Bachelor degree with minimum 50% marks"},
            {"type": "Entrance", "description": "CAT / MAT / XAT / CMAT / Sharda University Entrance Test"},
        ],
        "curriculum": ["Marketing Management", "Financial Management", "Business Analytics", "Strategic Management"],
        "specializations": ["Marketing", "Finance", "HR", "Operations", "International Business"],
    },
    {
        "id": "mbbs",
        "name": "Bachelor of Medicine, Bachelor of Surgery (MBBS)",
        "code": "MBBS",
        "discipline": "Medical",
        "level": "undergraduate",
        "duration": "5.5 years",
        "fees": {"tuitionPerYear": 650000, "totalTuition": 3575000, "hostel": 80000, "mess": 60000,
                 "registration": 50000, "other": 25000, "total": 3790000},
        "eligibility": [
            {"type": "Academic", "description": "Minimum 50% in 10+2 with Physics, Chemistry, Biology, and English"},
            {"type": "Entrance", "description": "NEET-UG (National Eligibility cum Entrance Test)"},
        ],
        "curriculum": ["Anatomy", "Physiology", "Biochemistry", "Pathology", "Pharmacology"],
        "accreditation": "NMC Approved",
    },
    {
        "id": "phd-management",
        "name": "Doctor of Philosophy in Management",
        "code": "PhD-MGMT",
        "discipline": "Management",
        "level": "doctoral",
        "duration": "3 years",
        "fees": {"tuitionPerYear": 120000, "totalTuition": 360000, **_STANDARD_CHARGES,
                 "other": 10000, "total": 535000},
        "eligibility": [{"type": "Academic", "description": "Master degree with minimum 55% marks"}],
        "curriculum": ["Research Methodology", "Quantitative Techniques", "Literature Review"],
    },
]

SAMPLE_SCHOLARSHIP_RECORDS = [
    {"country": "Bangladesh", "gpaMin": 3.5, "gpaMax": 5.0, "percentage": 50},
    {"country": "Bangladesh", "gpaMin": 3.0, "gpaMax": 3.49, "percentage": 20},
    {"country": "India", "gpaMin": 90, "gpaMax": 100, "percentage": 50},
    {"country": "India", "gpaMin": 80, "gpaMax": 89, "percentage": 25},
    {"country": "International", "gpaMin": 85, "gpaMax": 100, "percentage": 30},
]


def sample_catalog() -> List[Program]:
    return load_catalog(SAMPLE_PROGRAM_RECORDS, validate=True)


def sample_scholarship_rules() -> List[ScholarshipRule]:
    return load_scholarship_rules(SAMPLE_SCHOLARSHIP_RECORDS)

"""
seed_peptides.py

펩타이드 카탈로그 초기 데이터.

- POST /api/seed/peptides 및 scripts/seed_database.py 에서 사용
- common_effects / side_effects 는 Effect 시딩의 원천

"""

PEPTIDE_SEED_DATA = [
    {
        "name": "BPC-157",
        "peptide_sequence": "Gly-Glu-Pro-Pro-Pro-Gly-Lys-Pro-Ala-Asp-Asp-Ala-Gly-Leu-Val",
        "category": "Healing & Recovery",
        "description": "A synthetic peptide with potent healing and regenerative properties",
        "detailed_description": (
            "BPC-157 is a synthetic peptide derived from a protective protein found in gastric juice. "
            "It has shown remarkable healing properties for various tissues including tendons, muscles, "
            "and the gastrointestinal tract. Its mechanism involves promoting angiogenesis and tissue "
            "repair through growth factor modulation."
        ),
        "mechanism": "Promotes angiogenesis and tissue repair through growth factor modulation",
        "common_dosage": "250-500 mcg",
        "common_frequency": "daily",
        "common_effects": ["Tissue repair", "Anti-inflammatory", "Gut healing", "Tendon repair", "Joint healing"],
        "side_effects": ["Mild injection site reactions", "Rare allergic reactions"],
        "dosage_ranges": {"low": "250 mcg", "medium": "500 mcg", "high": "1000 mcg"},
        "timeline": {"onset": "1-2 days", "peak": "2-3 weeks", "duration": "4-6 weeks"},
    },
    {
        "name": "TB-500",
        "peptide_sequence": (
            "Ac-Ser-Asp-Lys-Pro-Asp-Met-Ala-Glu-Ile-Glu-Lys-Phe-Asp-Lys-Ser-Lys-Leu-Lys-Lys-Thr-Glu-Thr-"
            "Gln-Glu-Lys-Asn-Pro-Leu-Pro-Ser-Lys-Asp"
        ),
        "category": "Healing & Recovery",
        "description": "A synthetic peptide that promotes cell migration and tissue repair",
        "detailed_description": (
            "TB-500 is a synthetic version of Thymosin Beta-4, a naturally occurring peptide that plays a "
            "crucial role in cell migration and tissue repair. It has shown significant potential in "
            "accelerating healing of various tissues and reducing inflammation."
        ),
        "mechanism": "Promotes cell migration and angiogenesis through actin binding",
        "common_dosage": "2-5 mg",
        "common_frequency": "weekly",
        "common_effects": ["Tissue repair", "Wound healing", "Muscle recovery", "Joint healing", "Anti-inflammatory"],
        "side_effects": ["Mild injection site reactions", "Rare allergic reactions"],
        "dosage_ranges": {"low": "2 mg", "medium": "3.5 mg", "high": "5 mg"},
        "timeline": {"onset": "2-3 days", "peak": "3-4 weeks", "duration": "6-8 weeks"},
    },
    {
        "name": "CJC-1295",
        "peptide_sequence": (
            "Tyr-D-Ala-Asp-Ala-Ile-Phe-Thr-Gln-Ser-Tyr-Arg-Lys-Val-Leu-Ala-Gln-Leu-Ser-Ala-Arg-Lys-Leu-"
            "Leu-Gln-Asp-Ile-Leu-Ser-Arg"
        ),
        "category": "Growth Hormone",
        "description": "A long-acting growth hormone releasing hormone analog",
        "detailed_description": (
            "CJC-1295 is a synthetic analog of Growth Hormone Releasing Hormone (GHRH) that has been "
            "modified to have a longer half-life. It stimulates the natural production of growth hormone "
            "and IGF-1, leading to various anabolic and regenerative effects."
        ),
        "mechanism": "Growth hormone releasing hormone (GHRH) analog",
        "common_dosage": "1-2 mg",
        "common_frequency": "weekly",
        "common_effects": [
            "Increased muscle mass", "Fat loss", "Improved sleep", "Enhanced recovery", "Anti-aging effects",
        ],
        "side_effects": ["Water retention", "Joint pain", "Carpal tunnel syndrome", "Insulin resistance"],
        "dosage_ranges": {"low": "1 mg", "medium": "1.5 mg", "high": "2 mg"},
        "timeline": {"onset": "1-2 weeks", "peak": "4-6 weeks", "duration": "8-12 weeks"},
    },
    {
        "name": "Ipamorelin",
        "peptide_sequence": "Aib-His-D-2-Nal-D-Phe-Lys-NH2",
        "category": "Growth Hormone",
        "description": "A selective growth hormone secretagogue",
        "detailed_description": (
            "Ipamorelin is a pentapeptide that selectively stimulates growth hormone release without "
            "affecting other hormones like cortisol or prolactin. It's known for its clean profile and "
            "minimal side effects."
        ),
        "mechanism": "Growth hormone secretagogue",
        "common_dosage": "200-1000 mcg",
        "common_frequency": "daily",
        "common_effects": [
            "Increased muscle mass", "Fat loss", "Improved sleep", "Enhanced recovery", "Anti-aging effects",
        ],
        "side_effects": ["Mild hunger", "Rare headaches", "Insulin resistance"],
        "dosage_ranges": {"low": "200 mcg", "medium": "500 mcg", "high": "1000 mcg"},
        "timeline": {"onset": "1-2 hours", "peak": "2-3 hours", "duration": "4-6 hours"},
    },
    {
        "name": "GHK-Cu",
        "peptide_sequence": "Gly-His-Lys-Cu",
        "category": "Anti-Aging",
        "description": "A copper peptide with tissue repair and anti-inflammatory properties",
        "detailed_description": (
            "GHK-Cu is a naturally occurring copper peptide that has shown remarkable anti-aging and tissue "
            "repair properties. It's particularly effective for skin rejuvenation and wound healing."
        ),
        "mechanism": "Copper peptide with tissue repair and anti-inflammatory properties",
        "common_dosage": "1-3 mg",
        "common_frequency": "daily",
        "common_effects": [
            "Skin rejuvenation", "Wound healing", "Anti-inflammatory", "Collagen synthesis", "Hair growth",
        ],
        "side_effects": ["Mild injection site reactions", "Rare allergic reactions"],
        "dosage_ranges": {"low": "1 mg", "medium": "2 mg", "high": "3 mg"},
        "timeline": {"onset": "1-2 weeks", "peak": "4-6 weeks", "duration": "8-12 weeks"},
    },
    {
        "name": "PT-141",
        "peptide_sequence": "Ac-Nle-cyclo[Asp-His-D-Phe-Arg-Trp-Lys]-NH2",
        "category": "Performance & Enhancement",
        "description": "A melanocortin receptor agonist for sexual function",
        "detailed_description": (
            "PT-141 is a synthetic peptide that acts on melanocortin receptors to enhance sexual function. "
            "Unlike traditional treatments, it works through the central nervous system rather than "
            "affecting blood flow."
        ),
        "mechanism": "Melanocortin receptor agonist",
        "common_dosage": "1-2 mg",
        "common_frequency": "as needed",
        "common_effects": ["Enhanced libido", "Improved sexual function", "Increased arousal"],
        "side_effects": ["Nausea", "Flushing", "Headache", "Increased blood pressure"],
        "dosage_ranges": {"low": "1 mg", "medium": "1.5 mg", "high": "2 mg"},
        "timeline": {"onset": "30-60 minutes", "peak": "2-3 hours", "duration": "4-6 hours"},
    },
    {
        "name": "DSIP",
        "peptide_sequence": "Trp-Ala-Gly-Gly-Asp-Ala-Ser-Gly-Glu",
        "category": "Cognitive Enhancement",
        "description": "A delta sleep-inducing peptide",
        "detailed_description": (
            "DSIP (Delta Sleep-Inducing Peptide) is a naturally occurring peptide that helps regulate "
            "sleep patterns and stress response. It has shown potential in improving sleep quality and "
            "reducing stress."
        ),
        "mechanism": "Delta sleep-inducing peptide",
        "common_dosage": "100-500 mcg",
        "common_frequency": "daily",
        "common_effects": ["Improved sleep quality", "Stress reduction", "Anti-anxiety", "Pain relief"],
        "side_effects": ["Drowsiness", "Rare allergic reactions"],
        "dosage_ranges": {"low": "100 mcg", "medium": "250 mcg", "high": "500 mcg"},
        "timeline": {"onset": "30-60 minutes", "peak": "2-3 hours", "duration": "4-6 hours"},
    },
    {
        "name": "Epitalon",
        "peptide_sequence": "Ala-Glu-Asp-Gly",
        "category": "Anti-Aging",
        "description": "A telomerase-activating peptide",
        "detailed_description": (
            "Epitalon is a synthetic peptide that has shown potential in activating telomerase and "
            "extending telomeres, which are associated with cellular aging. It has demonstrated various "
            "anti-aging effects in research."
        ),
        "mechanism": "Telomerase activation and anti-aging properties",
        "common_dosage": "5-10 mg",
        "common_frequency": "daily",
        "common_effects": ["Anti-aging", "Improved sleep", "Enhanced longevity", "Cellular repair", "Immune support"],
        "side_effects": ["Mild injection site reactions", "Rare allergic reactions"],
        "dosage_ranges": {"low": "5 mg", "medium": "7.5 mg", "high": "10 mg"},
        "timeline": {"onset": "2-3 weeks", "peak": "4-6 weeks", "duration": "8-12 weeks"},
    },
    {
        "name": "Sermorelin",
        "peptide_sequence": (
            "Tyr-Ala-Asp-Ala-Ile-Phe-Thr-Asn-Ser-Tyr-Arg-Lys-Val-Leu-Gly-Gln-Leu-Ser-Ala-Arg-Lys-Leu-"
            "Leu-Gln-Asp-Ile-Met-Ser-Arg"
        ),
        "category": "Growth Hormone",
        "description": "A growth hormone releasing hormone",
        "detailed_description": (
            "Sermorelin is a synthetic version of Growth Hormone Releasing Hormone (GHRH) that stimulates "
            "the natural production of growth hormone. It's often used as a safer alternative to direct "
            "growth hormone therapy."
        ),
        "mechanism": "Growth hormone releasing hormone (GHRH)",
        "common_dosage": "100-300 mcg",
        "common_frequency": "daily",
        "common_effects": [
            "Increased muscle mass", "Fat loss", "Improved sleep", "Enhanced recovery", "Anti-aging effects",
        ],
        "side_effects": ["Water retention", "Joint pain", "Carpal tunnel syndrome", "Insulin resistance"],
        "dosage_ranges": {"low": "100 mcg", "medium": "200 mcg", "high": "300 mcg"},
        "timeline": {"onset": "1-2 weeks", "peak": "4-6 weeks", "duration": "8-12 weeks"},
    },
    {
        "name": "Tesamorelin",
        "peptide_sequence": (
            "Tyr-Ala-Asp-Ala-Ile-Phe-Thr-Asn-Ser-Tyr-Arg-Lys-Val-Leu-Gly-Gln-Leu-Ser-Ala-Arg-Lys-Leu-"
            "Leu-Gln-Asp-Ile-Met-Ser-Arg-NH2"
        ),
        "category": "Growth Hormone",
        "description": "A growth hormone releasing hormone analog for metabolic effects",
        "detailed_description": (
            "Tesamorelin is a synthetic analog of GHRH that has been specifically developed for its "
            "metabolic effects. It's particularly effective in reducing visceral fat and improving "
            "metabolic parameters."
        ),
        "mechanism": "Growth hormone releasing hormone analog",
        "common_dosage": "1-2 mg",
        "common_frequency": "daily",
        "common_effects": [
            "Reduced visceral fat", "Improved metabolic profile", "Enhanced body composition",
            "Increased IGF-1 levels",
        ],
        "side_effects": ["Joint pain", "Muscle pain", "Edema", "Insulin resistance"],
        "dosage_ranges": {"low": "1 mg", "medium": "1.5 mg", "high": "2 mg"},
        "timeline": {"onset": "2-3 weeks", "peak": "6-8 weeks", "duration": "12-16 weeks"},
    },
    {
        "name": "Semaglutide",
        "peptide_sequence": (
            "His-Ala-Glu-Gly-Thr-Phe-Thr-Ser-Asp-Val-Ser-Ser-Tyr-Leu-Glu-Gly-Gln-Ala-Ala-Lys-Glu-Phe-"
            "Ile-Ala-Trp-Leu-Val-Lys-Gly-Arg-Gly"
        ),
        "category": "GLP-1 Agonist",
        "description": "A long-acting GLP-1 receptor agonist for metabolic control",
        "detailed_description": (
            "Semaglutide is a GLP-1 receptor agonist that has been modified for extended duration of "
            "action. It's particularly effective for weight management and metabolic control, with "
            "effects lasting up to a week."
        ),
        "mechanism": "GLP-1 receptor agonist with extended half-life",
        "common_dosage": "0.25-2.4 mg",
        "common_frequency": "weekly",
        "common_effects": [
            "Weight loss", "Improved glycemic control", "Reduced appetite", "Enhanced satiety",
            "Improved metabolic parameters",
        ],
        "side_effects": ["Nausea", "Vomiting", "Diarrhea", "Constipation", "Abdominal pain"],
        "dosage_ranges": {"low": "0.25 mg", "medium": "1.0 mg", "high": "2.4 mg"},
        "timeline": {"onset": "1-2 days", "peak": "3-4 days", "duration": "7 days"},
    },
]

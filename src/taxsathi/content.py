"""Marketing copy for the public pages."""
from __future__ import annotations

FIRM = {
    "name": "Tax Sathi",
    "legal_name": "Tax Sathi Pvt. Ltd.",
    "tagline": "Where Accuracy Meets Trust",
    "summary": (
        "Professional tax advisory and accounting services in Kathmandu. "
        "Expert financial solutions for individuals and businesses."
    ),
    "phone": "+977 9846750524",
    "email": "ca.sushilkafle@gmail.com",
    "address": "Baneshwor, Kathmandu",
    "country": "Nepal",
}

BUSINESS_HOURS = [
    "Monday - Friday: 9:00 AM - 6:00 PM",
    "Saturday: 10:00 AM - 4:00 PM",
    "Sunday: Closed",
]

NAV_LINKS = [
    ("home", "Home", "/"),
    ("about", "About", "/about"),
    ("services", "Services", "/services"),
    ("contact", "Contact", "/contact"),
]

SERVICES = [
    {
        "title": "Bookkeeping",
        "summary": "Accurate record keeping and financial tracking for your business operations.",
        "description": (
            "Comprehensive bookkeeping services to maintain accurate financial records for your "
            "business. We handle daily transactions, categorize expenses, and ensure your books "
            "are always up-to-date and compliant with accounting standards."
        ),
        "features": [
            "Daily transaction recording",
            "Expense categorization",
            "Account reconciliation",
            "Monthly financial summaries",
        ],
        "benefits": (
            "Save time and ensure accuracy with professional bookkeeping that provides clear "
            "insights into your business performance."
        ),
    },
    {
        "title": "Financial Statement Preparation",
        "summary": "Professional preparation of comprehensive financial statements and reports.",
        "description": (
            "Professional preparation of comprehensive financial statements including balance "
            "sheets, income statements, and cash flow statements. Our detailed reports provide "
            "valuable insights for decision-making and compliance requirements."
        ),
        "features": [
            "Balance sheet preparation",
            "Income statement analysis",
            "Cash flow statements",
            "Notes to financial statements",
        ],
        "benefits": (
            "Get professionally prepared financial statements that meet regulatory requirements "
            "and support business decisions."
        ),
    },
    {
        "title": "Payroll Processing",
        "summary": "Efficient payroll management ensuring compliance and timely payments.",
        "description": (
            "Efficient and accurate payroll processing services ensuring timely salary payments, "
            "tax compliance, and proper documentation. We handle all aspects of payroll "
            "management from calculation to distribution."
        ),
        "features": [
            "Salary calculations",
            "Tax deductions",
            "EPF/CIT compliance",
            "Payroll reports",
        ],
        "benefits": (
            "Ensure accurate and timely payroll processing while maintaining full compliance "
            "with labor laws and tax regulations."
        ),
    },
    {
        "title": "Budgeting and Forecasting",
        "summary": "Strategic financial planning to help your business grow and succeed.",
        "description": (
            "Strategic financial planning services including budget preparation, variance "
            "analysis, and financial forecasting. We help you plan for growth and make informed "
            "financial decisions for your business future."
        ),
        "features": [
            "Annual budget preparation",
            "Monthly variance analysis",
            "Cash flow forecasting",
            "Financial planning",
        ],
        "benefits": (
            "Make informed business decisions with comprehensive budgeting and forecasting that "
            "drives growth and profitability."
        ),
    },
    {
        "title": "Accounts Payable/Receivable Management",
        "summary": "Streamlined management of your business cash flow and collections.",
        "description": (
            "Streamlined management of your business cash flow through efficient accounts "
            "payable and receivable processes. We optimize your working capital and improve cash "
            "flow management."
        ),
        "features": [
            "Invoice management",
            "Payment processing",
            "Credit control",
            "Aging reports",
        ],
        "benefits": (
            "Improve cash flow and reduce bad debts with professional accounts management that "
            "optimizes your working capital."
        ),
    },
    {
        "title": "Bank Reconciliation",
        "summary": "Accurate matching of bank records with your financial statements.",
        "description": (
            "Accurate matching of your bank records with financial statements to ensure data "
            "integrity and identify discrepancies. Regular reconciliation helps maintain "
            "accurate financial records."
        ),
        "features": [
            "Monthly bank reconciliation",
            "Discrepancy identification",
            "Error correction",
            "Financial accuracy assurance",
        ],
        "benefits": (
            "Maintain accurate financial records and catch errors early with regular "
            "professional bank reconciliation services."
        ),
    },
    {
        "title": "Tax Advisory",
        "summary": "Expert guidance on tax compliance and optimization strategies.",
        "description": (
            "Expert guidance on tax compliance, planning, and optimization strategies. We help "
            "you navigate complex tax regulations while minimizing liabilities and ensuring full "
            "compliance with tax laws."
        ),
        "features": [
            "Tax compliance review",
            "Tax optimization strategies",
            "Regulatory updates",
            "Tax risk assessment",
        ],
        "benefits": (
            "Stay compliant and minimize tax liabilities with expert advisory services that keep "
            "you informed of regulatory changes."
        ),
    },
    {
        "title": "Tax Planning",
        "summary": "Proactive tax planning to minimize liabilities and maximize savings.",
        "description": (
            "Proactive tax planning services to minimize tax liabilities and maximize savings "
            "through strategic planning and timing of financial decisions. We develop customized "
            "tax strategies for your specific situation."
        ),
        "features": [
            "Strategic tax planning",
            "Investment advice",
            "Deduction optimization",
            "Tax-efficient structuring",
        ],
        "benefits": (
            "Maximize tax savings and optimize your financial position with strategic tax "
            "planning tailored to your specific needs."
        ),
    },
]

PROCESS_STEPS = [
    ("Consultation", "We start with understanding your specific needs and business requirements."),
    ("Planning", "Develop a customized strategy tailored to your financial goals and objectives."),
    ("Implementation", "Execute the plan with precision, maintaining regular communication throughout."),
    ("Monitoring", "Continuous monitoring and optimization to ensure sustained success and compliance."),
]

TESTIMONIALS = [
    {
        "name": "Rajan Kuwar",
        "position": "Director",
        "company": "Multimate Pvt. Ltd.",
        "text": (
            "Tax Sathi has been instrumental in streamlining our financial processes. Their "
            "expertise and attention to detail are unmatched."
        ),
    },
    {
        "name": "Bijay Limbu",
        "position": "Chairman",
        "company": "Info Tech Store",
        "text": (
            "Professional, reliable, and always available when we need them. Highly recommended "
            "for any business."
        ),
    },
    {
        "name": "Surya Kharel",
        "position": "Director",
        "company": "Hotel Suramma",
        "text": (
            "Their tax planning advice saved us significant money. Truly where accuracy meets "
            "trust!"
        ),
    },
]

VALUES = [
    ("Accuracy", "We ensure precision in every calculation and report, maintaining the highest standards of accuracy."),
    ("Trust", "Building lasting relationships through transparency, integrity, and reliable service delivery."),
    ("Client Focus", "Your success is our priority. We tailor our services to meet your unique business needs."),
    ("Excellence", "Committed to delivering exceptional quality in all our professional services and consultations."),
]

TEAM = [
    ("CA Sushil Kafle", "Chairman"),
    ("Khagendra Chand", "Chief Financial Officer"),
    ("Sulab Dhunju", "Chief Operating Officer"),
    ("Subash Aryal", "Chief Marketing Officer"),
    ("Sushila Basnet", "Executive Director"),
    ("Ram Dahal", "Human Resource Manager"),
    ("Shushil Upadhyaya", "Chief Technical Officer"),
]

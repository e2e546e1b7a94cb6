# Articles and FAQ entries served by /api/content. Bodies are lists of paragraphs.

POSTS = [
    {
        "slug": "warning-signs-foreclosure-texas",
        "title": "10 Warning Signs You're Heading Toward Foreclosure in Texas",
        "category": "Pre-Foreclosure",
        "excerpt": "Most homeowners don't realize they're in foreclosure danger until the Notice of Default arrives. "
                   "Learn what to watch for and what to do now.",
        "published_date": "2026-02-19",
        "read_minutes": 12,
        "tags": ["Warning Signs", "Foreclosure Prevention", "Early Detection", "Financial Hardship"],
        "body": [
            "Foreclosure rarely arrives without warning. Missed payments, late-fee notices and calls from your "
            "servicer's collections department are the first signals that your loan is heading into default.",
            "Using credit cards to cover the mortgage, draining savings and falling behind on property taxes or "
            "HOA dues are all signs that a short-term hardship is becoming a long-term problem.",
            "The earlier you act, the more options you keep. Contact your servicer, request a loss mitigation "
            "application and get a free consultation before the Notice of Default starts the clock.",
        ],
        "related": ["notice-of-default-action-plan", "texas-loan-modification-guide"],
    },
    {
        "slug": "notice-of-default-action-plan",
        "title": "Received a Notice of Default in Texas? Your 21-Day Action Plan",
        "category": "Notice of Default",
        "excerpt": "You have roughly three weeks to cure the default before the foreclosure accelerates. "
                   "Here is exactly what to do with each of those days.",
        "published_date": "2026-02-20",
        "read_minutes": 15,
        "tags": ["Notice of Default", "Action Plan", "Timeline", "Cure Period"],
        "body": [
            "Texas law gives you at least 20 days after the Notice of Default to cure the default by paying the "
            "past-due amount. FHA, VA and home equity loans usually allow 30 days.",
            "In the first week, read the notice carefully, write down every deadline and call your servicer's "
            "loss mitigation department. Document every conversation.",
            "In the second and third weeks, gather financial documents, talk to a HUD-approved housing counselor "
            "and decide between reinstatement, modification, a short sale or a fast cash sale.",
        ],
        "related": ["warning-signs-foreclosure-texas", "texas-foreclosure-auction-guide"],
    },
    {
        "slug": "texas-loan-modification-guide",
        "title": "Texas Loan Modification Guide: How to Negotiate with Your Lender",
        "category": "Foreclosure Prevention",
        "excerpt": "A loan modification can lower your payment, your rate or extend your term. "
                   "This guide walks through the process from application to approval.",
        "published_date": "2026-02-21",
        "read_minutes": 18,
        "tags": ["Loan Modification", "Negotiation", "Loss Mitigation", "Hardship Letter"],
        "body": [
            "A loan modification permanently changes the terms of your mortgage so the payment becomes affordable "
            "again. Lenders look for a genuine hardship and proof that you can afford the new payment.",
            "Submit a complete application, including a hardship letter, pay stubs, bank statements and tax "
            "returns. A complete application received at least 37 days before a scheduled sale pauses the sale.",
            "Follow up weekly, keep copies of everything and have a backup plan in case the modification is denied.",
        ],
        "related": ["texas-short-sale-guide", "notice-of-default-action-plan"],
    },
    {
        "slug": "texas-short-sale-guide",
        "title": "Texas Short Sale Guide: Sell Your Home and Avoid Foreclosure",
        "category": "Foreclosure Prevention",
        "excerpt": "A short sale lets you sell for less than you owe with your lender's approval, "
                   "protecting your credit far better than a completed foreclosure.",
        "published_date": "2026-02-22",
        "read_minutes": 14,
        "tags": ["Short Sale", "Foreclosure Alternative", "Credit Protection", "Lender Approval"],
        "body": [
            "When a home is worth less than the loan balance, a short sale asks the lender to accept the sale "
            "proceeds as payment in full or in part.",
            "The lender will want a hardship letter, financial documents and a purchase offer. Approval can take "
            "weeks, so start well before the sale date.",
            "Ask the lender to waive any deficiency in writing before closing.",
        ],
        "related": ["texas-loan-modification-guide", "texas-foreclosure-auction-guide"],
    },
    {
        "slug": "texas-foreclosure-auction-guide",
        "title": "Texas Foreclosure Auction: What Happens on Sale Day",
        "category": "Post-Foreclosure",
        "excerpt": "The auction is the final stage, held on the courthouse steps. Understanding sale day helps you "
                   "make informed decisions about deficiency judgments and your next steps.",
        "published_date": "2026-02-23",
        "read_minutes": 10,
        "tags": ["Foreclosure Auction", "Sale Day", "Redemption Rights", "Deficiency Judgment"],
        "body": [
            "Texas foreclosure sales happen on the first Tuesday of each month at the county courthouse, between "
            "10:00 AM and 4:00 PM, after at least 21 days' posted notice.",
            "The property goes to the highest bidder. If the price does not cover what you owe, the lender has two "
            "years to sue for a deficiency judgment.",
            "You do not have to move out on sale day. The new owner must serve a notice to vacate and, if needed, "
            "file an eviction suit.",
        ],
        "related": ["notice-of-default-action-plan", "texas-short-sale-guide"],
    },
]

FAQ = [
    {
        "category": "General",
        "question": "How long does the foreclosure process take in Texas?",
        "answer": "From the Notice of Default to the sale, a Texas foreclosure can finish in as little as 41 to 60 "
                  "days. Including the federal 120-day delinquency period, the whole process typically takes six "
                  "to seven months from the first missed payment.",
    },
    {
        "category": "General",
        "question": "Can I stop a foreclosure once it has started?",
        "answer": "Often, yes: reinstate within the cure period, file for bankruptcy, submit a complete loss "
                  "mitigation application at least 37 days before the sale, or sell before the sale date.",
    },
    {
        "category": "Financial",
        "question": "Will I owe money after a foreclosure?",
        "answer": "If the auction price is less than what you owe, the lender may sue for a deficiency judgment "
                  "within two years of the sale.",
    },
    {
        "category": "Timeline",
        "question": "How much time do I have after receiving a Notice of Default?",
        "answer": "At least 20 days to reinstate by paying the past-due amount; FHA, VA and home equity loans "
                  "usually allow 30 days.",
    },
    {
        "category": "Timeline",
        "question": "When is the foreclosure sale held?",
        "answer": "On the first Tuesday of the month at the county courthouse, between 10:00 AM and 4:00 PM, after "
                  "at least 21 days' notice.",
    },
    {
        "category": "Options",
        "question": "How quickly can EnterActDFW buy my home?",
        "answer": "We provide a fair cash offer within 24 to 48 hours and can often close in 7 to 10 days.",
    },
    {
        "category": "Options",
        "question": "Do I have to pay commissions or fees if I sell to EnterActDFW?",
        "answer": "No. There are no commissions, closing costs or hidden fees.",
    },
    {
        "category": "Timeline",
        "question": "Can I stay in my home during the foreclosure process?",
        "answer": "Yes. After the sale the new owner must serve a notice to vacate and go through the eviction "
                  "process before you have to leave.",
    },
]

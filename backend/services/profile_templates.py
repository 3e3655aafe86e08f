"""Fixed pool of placeholder résumés used when no text can be recovered.

The template for a document is chosen from its name alone, so the same
name always yields the same text.
"""

import re

PROFILE_TEMPLATES: list[tuple[str, str]] = [
    ("Sarah Chen", """CV - Sarah Chen

PROFESSIONAL PROFILE
Senior Full Stack Developer with 6 years of experience in React, Node.js and cloud architectures.
Focused on building scalable applications and shipping product quickly.

TECHNICAL SKILLS
- Frontend: React, Next.js, TypeScript, Redux, Tailwind CSS, Vue.js
- Backend: Node.js, Express, NestJS, Python, Django
- Databases: PostgreSQL, MongoDB, Redis, ElasticSearch
- Cloud and DevOps: AWS, Docker, Kubernetes, Jenkins, GitLab CI/CD
- Mobile: React Native, Flutter
- Architecture: Microservices, REST APIs, GraphQL

EXPERIENCE
Lead Developer - TechInnovate (2021-2024)
- Designed and built a React/Node.js e-commerce platform
- Managed a team of 5 developers
- Migrated the platform to microservices on AWS ECS
- Improved performance by 60% and cut infrastructure costs by 40%

Senior Full Stack Developer - DigitalSolutions (2019-2021)
- Built complex web applications with React and Express
- Integrated third-party APIs and designed REST APIs
- Set up automated testing and CI/CD, mentored junior developers

Full Stack Developer - StartupFlow (2018-2019)
- Delivered the MVP of a fintech application in React/Node.js
- Integrated Stripe and PayPal payments

EDUCATION
MSc Software Engineering - EPITECH (2018)
AWS Solutions Architect Associate (2022)
Google Cloud Professional Developer (2023)

LANGUAGES
French: Native, English: Fluent, Chinese: Intermediate"""),
    ("Marc Dubois", """CV - Marc Dubois

PROFESSIONAL PROFILE
Backend Developer with 4 years of experience in Java/Spring Boot and Python.
Database and distributed systems specialist with a strong taste for optimisation.

TECHNICAL SKILLS
- Backend: Java, Spring Boot, Spring Security, Python, Django, FastAPI
- Databases: PostgreSQL, MySQL, MongoDB, Redis, Cassandra
- Architecture: Microservices, Domain-Driven Design, Event Sourcing
- Messaging: Apache Kafka, RabbitMQ
- Cloud: AWS, GCP, Terraform, Docker, Kubernetes
- Monitoring: Prometheus, Grafana, ELK Stack

EXPERIENCE
Senior Backend Developer - FinanceSecure (2022-2024)
- Built critical APIs for a digital bank with 100k+ users
- Designed highly available payment systems
- Reduced response time of complex SQL queries by 80%
- Introduced an event-driven architecture on Kafka

Backend Developer - DataFlow (2020-2022)
- Built REST and GraphQL APIs in Java/Spring Boot
- Split a monolithic database into microservices

Junior Developer - TechConseil (2019-2020)
- Maintained legacy Java web services, wrote JUnit tests

EDUCATION
Engineering degree in Computer Science - INSA Lyon (2019)
Spring Professional Certification (2021)

LANGUAGES
French: Native, English: Professional, German: Basic"""),
    ("Emma Rodriguez", """CV - Emma Rodriguez

PROFESSIONAL PROFILE
Frontend Developer with 5 years of experience in React and design systems.
UX/UI minded, user-centred, with solid accessibility expertise.

TECHNICAL SKILLS
- Frontend: React, TypeScript, Next.js, Gatsby, Vue.js
- State management: Redux, Zustand, Context API, MobX
- Styling: CSS3, Sass, Styled-components, Tailwind CSS
- Testing: Jest, React Testing Library, Cypress, Playwright
- Design systems: Storybook, Figma, Adobe XD

EXPERIENCE
Frontend Lead - DesignFirst Agency (2022-2024)
- Built and maintained design systems for 10+ B2B clients
- Ran UX audits and WCAG 2.1 AA compliance reviews
- Improved Core Web Vitals across client sites

Senior Frontend Developer - MediaCorp (2020-2022)
- Built React applications for a media platform with 2M+ users
- Reduced bundle size by 45%

Frontend Developer - CreativeStudio (2019-2020)
- Turned Figma mockups into responsive React sites

EDUCATION
MA Interaction Design - School of Design (2019)
BSc Computer Science - Sorbonne University (2017)
Google UX Design Certificate (2020)

LANGUAGES
French: Native, Spanish: Native, English: Fluent, Italian: Intermediate"""),
    ("Alex Johnson", """CV - Alex Johnson

PROFESSIONAL PROFILE
Versatile Full Stack Developer with 3 years of startup experience.
Learns new technologies quickly and enjoys solving hard problems.

TECHNICAL SKILLS
- Frontend: React, JavaScript ES6+, HTML5, CSS3, Bootstrap
- Backend: Node.js, Express, Python, Flask
- Databases: MongoDB, PostgreSQL, SQLite
- Cloud: AWS EC2, S3, Heroku, Netlify, Vercel
- Tools: Git, Docker (beginner), Postman
- Testing: Jest, Mocha, Chai

EXPERIENCE
Full Stack Developer - GreenTech Startup (2021-2024)
- Built an energy management web application (React/Node.js/MongoDB)
- Served 5000+ active users, integrated IoT sensor APIs
- Worked directly with the founders on the product roadmap

Junior Web Developer - WebAgency Local (2020-2021)
- Built brochure sites in React and WordPress

Developer Intern - TechConsulting (2020)
- Built internal tools in Python/Flask

EDUCATION
BSc Computer Science - Paris Diderot University (2020)
Full Stack Web Developer Bootcamp - Le Wagon (2019)

LANGUAGES
French: Native, English: Good"""),
    ("Dr. Sophie Laurent", """CV - Dr. Sophie Laurent

PROFESSIONAL PROFILE
Senior Software Engineer with 8 years of experience and a PhD in computer science.
Expert in software architecture, artificial intelligence and high performance systems.

TECHNICAL SKILLS
- Languages: Python, Java, C++, JavaScript, TypeScript, Go, Rust
- Frameworks: Django, FastAPI, Spring Boot, React, Angular
- AI/ML: TensorFlow, PyTorch, Scikit-learn, OpenCV, NLP
- Big Data: Apache Spark, Hadoop, Kafka, ElasticSearch
- Cloud: AWS, Google Cloud, Azure, Kubernetes, Docker

EXPERIENCE
Senior Software Architect - AI Research Lab (2020-2024)
- Built AI systems for medical data analysis
- Technical lead of a team of 8 engineers, 3 patents filed
- Cut infrastructure costs by 50%

Lead Developer - HealthTech Corp (2018-2020)
- Built a telemedicine platform (React/Python/PostgreSQL) with 99.9% uptime
- Managed 6 developers, owned GDPR compliance

R&D Engineer - Tech Research Institute (2016-2018)
- Computer vision research, 5 international conference papers

EDUCATION
PhD Artificial Intelligence - Ecole Polytechnique (2016)
MSc Computer Science - ENS Cachan (2013)

LANGUAGES
French: Native, English: Fluent, German: Intermediate"""),
    ("Thomas Martin", """CV - Thomas Martin

PROFESSIONAL PROFILE
Backend Developer with 2 years of experience, specialised in Node.js.
Recent graduate keen to grow into full stack development.

TECHNICAL SKILLS
- Backend: Node.js, Express, JavaScript ES6+, TypeScript (learning)
- Databases: MongoDB, MySQL, Redis
- APIs: REST, JWT, OAuth 2.0
- Cloud: AWS EC2, S3, Docker basics
- Testing: Jest, Mocha, Postman

EXPERIENCE
Junior Backend Developer - StartupLocal (2022-2024)
- Built REST APIs for a mobile e-commerce application
- Managed a MongoDB catalogue of 10k+ products
- Integrated Stripe and PayPal payments
- Improved database query performance by 40%

Developer Intern - WebStudio (2022)
- Built client APIs on a custom Node.js CMS

EDUCATION
MSc Software Development - SUPINFO (2022)
BSc Computer Science - Lyon 1 University (2020)
MongoDB Developer Associate (2023)

LANGUAGES
French: Native, English: Intermediate"""),
]

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")
_PDF_SUFFIX_RE = re.compile(r"\.pdf$", re.IGNORECASE)


def template_index(document_name: str) -> int:
    """Pool index for a document: alphanumeric length of its stem modulo pool size."""
    stem = _PDF_SUFFIX_RE.sub("", document_name)
    return len(_NON_ALNUM_RE.sub("", stem)) % len(PROFILE_TEMPLATES)


def template_for(document_name: str) -> str:
    """Deterministic placeholder résumé text for a document name."""
    return PROFILE_TEMPLATES[template_index(document_name)][1]


def sample_documents() -> list[tuple[str, str]]:
    """(name, text) pairs for the built-in sample batch, one per template."""
    return [
        (f"sample-{re.sub(r'[^a-z0-9]+', '-', name.lower()).strip('-')}.pdf", text)
        for name, text in PROFILE_TEMPLATES
    ]

"""Built-in rewrite tables.

Plain data: literal phrase rules, regex rules for sentence-level transition
words, the contraction table and the interjection catalog. Ordering inside
each table does not matter for matching (the dictionary sorts by pattern
length) but is kept roughly longest-first for readability.
"""

# (phrase, replacement); matched case-insensitively on word boundaries
PHRASE_RULES = [
    # 6+ word phrases
    ("cannot be overstated in the context of", "is seriously huge when you think about"),
    ("has gained significant traction in recent years", "has really taken off lately"),
    ("has gained considerable attention in recent years", "has gotten way more attention lately"),
    ("reflecting a growing understanding of the importance of", "as folks catch on to how much"),
    ("create supportive environments that prioritize", "build workplaces where they actually care about"),
    ("mental health support into primary care settings", "mental health help into regular checkups"),
    ("enabling students to progress at their own pace", "so students can go at their own speed"),
    ("access resources tailored to their individual needs", "grab stuff made just for them"),
    ("allowing students in remote areas", "so kids in the middle of nowhere can"),
    ("connect with expert instructors worldwide", "learn from top teachers anywhere"),
    ("complex tasks that were previously exclusive to human experts", "tricky stuff only humans used to pull off"),
    ("the ethical implications of automated decision-making", "whether it's right to let machines make calls"),
    ("the significant opportunities that AI presents", "the big chances AI opens up"),
    ("offering clean and abundant sources of energy", "giving us clean power that doesn't run out"),
    ("responsible development and deployment", "building and using these things responsibly"),
    ("despite contributing the least to the problem", "even though they barely caused any of it"),
    ("advocacy efforts and increased public discourse", "people speaking up and actually talking about it"),
    ("more frequent and severe weather events", "crazier storms"),
    ("disruptions to ecosystems worldwide", "nature getting messed up everywhere"),
    ("automatically adjusting difficulty levels", "tweaking how hard stuff is"),
    ("providing targeted feedback to enhance student comprehension", "giving students tips to help them get it"),
    ("fossil fuels and deforestation", "oil, coal, and gas plus chopping down forests"),
    ("primarily from the burning of", "mainly from burning"),
    ("due to the increased concentration of", "'cause there's way more"),
    ("misinformation, mental health, and privacy concerns", "fake news, mental health stuff, and privacy worries"),
    ("recognizing the urgent need to address", "because they see we urgently need to tackle"),
    ("climate change and reduce carbon emissions", "climate change and cut down on carbon"),
    ("the rapid advancement of artificial intelligence", "AI zooming forward"),
    # 4-5 word phrases
    ("it is imperative that", "we really need to"),
    ("it is essential that", "we gotta make sure"),
    ("cannot be overstated", "is seriously huge"),
    ("one of the most pressing challenges", "a massive headache"),
    ("one of the most significant", "seriously one of the biggest"),
    ("one of the most important", "a pretty big deal for"),
    ("plays a crucial role in", "is super important for"),
    ("plays a vital role in", "really matters for"),
    ("plays a significant role in", "has a big part in"),
    ("in the context of", "when we talk about"),
    ("the importance of", "how much"),
    ("has fundamentally transformed", "has totally changed"),
    ("has fundamentally reshaped", "has completely flipped"),
    ("have emerged as viable alternatives to", "are now real options instead of"),
    ("have emerged as", "have turned into"),
    ("has emerged as", "has become"),
    ("the scientific consensus is clear", "scientists pretty much all say the same thing"),
    ("in recent years", "lately"),
    ("in the twenty-first century", "these days"),
    ("has far-reaching consequences", "causes all sorts of problems"),
    ("rising sea levels", "oceans getting higher"),
    ("not distributed equally", "not shared fairly"),
    ("bearing a disproportionate burden", "getting hit way harder"),
    ("overall quality of life", "how good your life feels"),
    ("physical health outcomes", "your physical health"),
    ("significant barriers to accessing", "real problems getting"),
    ("particularly for marginalized communities", "especially for people already struggling"),
    ("consistently demonstrated that", "shown over and over that"),
    ("consistently demonstrated", "shown again and again"),
    ("intricately linked to", "super connected to"),
    ("with conditions such as", "- stuff like"),
    ("having profound effects on", "really messing with"),
    ("has begun to diminish", "has started to fade"),
    ("largely due to", "mostly because of"),
    ("the stigma surrounding", "that whole shame around"),
    ("mental health issues", "mental health stuff"),
    ("the integration of technology in", "mixing tech into"),
    ("for students and educators alike", "for both students and teachers"),
    ("digital tools and platforms", "apps and websites"),
    ("unprecedented opportunities", "awesome new chances"),
    ("expanded access to quality education", "made good education way more available"),
    ("artificial intelligence and adaptive learning algorithms", "AI and smart learning tech"),
    ("are revolutionizing how", "are changing the whole way"),
    ("has revolutionized numerous sectors", "has turned a bunch of industries upside down"),
    ("from healthcare to finance", "from hospitals to banks"),
    ("machine learning algorithms", "these AI programs"),
    ("are increasingly capable of performing", "keep getting better at handling"),
    ("this technological transformation", "all this tech shaking things up"),
    ("has raised important questions about", "has people wondering about"),
    ("the future of employment", "what jobs will even look like"),
    ("organizations must carefully navigate", "companies gotta figure out"),
    ("these challenges while embracing", "these tricky spots while grabbing"),
    ("for innovation and growth", "to grow and innovate"),
    ("the importance of renewable energy", "how huge clean energy is"),
    ("global sustainability efforts", "keeping the planet livable"),
    ("technological innovations have significantly reduced", "new tech has seriously cut"),
    ("the cost of renewable energy production", "what clean energy costs to make"),
    ("making it increasingly competitive with", "so now it can actually compete with"),
    ("traditional energy sources", "the old stuff like coal and gas"),
    ("the transition to renewable energy creates", "going green opens up"),
    ("economic opportunities through job creation", "jobs and money-making chances"),
    ("in the green technology sector", "in clean tech"),
    ("governments worldwide are implementing policies", "countries everywhere are making rules"),
    ("to accelerate this transition", "to speed up the switch"),
    ("social media platforms have significantly impacted", "social media's totally changed"),
    ("the way people communicate and share information", "how we talk to each other and share stuff"),
    ("offer unprecedented connectivity", "keep us more connected than ever"),
    ("present challenges related to", "bring problems like"),
    ("robust governance frameworks", "solid rules"),
    ("powerful technologies", "powerful tools"),
    ("natural language understanding", "understanding what we say"),
    ("human-computer interaction", "talking to computers"),
    ("learning management systems", "learning platforms"),
    ("personalized learning", "learning that's tailored to you"),
    # 2-3 word phrases
    ("remarkable capabilities", "crazy-good skills"),
    ("ethical concerns", "ethical stuff to worry about"),
    ("critical applications", "important stuff"),
    ("daily life", "everyday life"),
    ("large language models", "big AI language models"),
    ("new forms of", "whole new ways of"),
    ("autonomous vehicles", "self-driving cars"),
    ("healthcare diagnostics", "checking your health"),
    ("in this day and age", "these days"),
    ("in today's world", "right now"),
    ("in today's society", "now"),
    ("mental health services persist", "mental health help hang around"),
    ("this warming trend", "all this warming"),
    ("the impacts of climate change are", "climate change hits different -"),
    ("facing humanity", "we're all dealing with"),
    ("developing nations", "poorer countries"),
    ("vulnerable communities", "people already struggling"),
    ("fossil fuels", "oil and coal"),
    ("far-reaching", "wide-ranging"),
    ("solar and wind power", "solar and wind"),
    ("viable alternatives", "real options"),
    ("psychological well-being", "mental health"),
    ("healthcare systems integrate", "doctors start mixing in"),
    ("mental health awareness", "talking about mental health"),
    ("virtual classrooms and online", "online classes and"),
    ("beyond geographical limitations", "no matter where you live"),
    ("has gained significant traction", "has really taken off"),
    ("has gained considerable attention", "has gotten way more attention"),
    # single formal words
    ("utilize", "use"),
    ("utilizing", "using"),
    ("utilization", "use"),
    ("facilitate", "help"),
    ("facilitating", "helping"),
    ("demonstrate", "show"),
    ("demonstrating", "showing"),
    ("demonstrated", "shown"),
    ("delve into", "look at"),
    ("delve", "dig"),
    ("delving", "digging"),
    ("enhance", "boost"),
    ("enhancing", "boosting"),
    ("implement", "set up"),
    ("implementing", "setting up"),
    ("leverage", "use"),
    ("leveraging", "using"),
    ("optimize", "improve"),
    ("optimizing", "improving"),
    ("significant", "big"),
    ("significantly", "a lot"),
    ("substantial", "major"),
    ("substantially", "a lot"),
    ("comprehensive", "full"),
    ("numerous", "tons of"),
    ("fundamentally", "totally"),
    ("imperative", "gotta-do"),
    ("unprecedented", "wild"),
    ("profound", "huge"),
    ("profoundly", "deeply"),
    ("intricately", "closely"),
    ("disproportionate", "unfair"),
    ("comprehension", "understanding"),
    ("paramount", "super important"),
    ("pivotal", "key"),
    ("meticulous", "careful"),
    ("transformative", "game-changing"),
    ("reshaped", "flipped"),
    ("increasingly", "more and more"),
    ("integrated", "baked"),
    ("accountability", "owning up"),
    ("transparency", "being open"),
    ("collaborate", "work together"),
    ("policymakers", "the people in charge"),
    ("represents a", "is a"),
    ("represents", "is"),
]

# (regex, replacement); sentence-level transitions swallow their comma
TRANSITION_RULES = [
    (r"\bit is important to note that\s*", "worth saying - "),
    (r"\bit is worth noting that\s*", "here's the thing - "),
    (r"\bit should be noted that\s*", "just so you know, "),
    (r"\bfurthermore\b,?\s*", "plus, "),
    (r"\bmoreover\b,?\s*", "and hey, "),
    (r"\badditionally\b,?\s*", "on top of that, "),
    (r"\bhowever\b,\s*", "but "),
    (r"\bnevertheless\b,?\s*", "still, "),
    (r"\bnonetheless\b,?\s*", "even so, "),
    (r"\bconsequently\b,?\s*", "so "),
    (r"\bsubsequently\b,?\s*", "after that, "),
    (r"\bin conclusion\b,?\s*", "bottom line, "),
    (r"\bto summarize\b,?\s*", "basically, "),
    (r"\bin summary\b,?\s*", "basically, "),
]

# (phrase, contraction, case_sensitive)
CONTRACTION_RULES = [
    ("do not", "don't", False),
    ("does not", "doesn't", False),
    ("did not", "didn't", False),
    ("will not", "won't", False),
    ("would not", "wouldn't", False),
    ("could not", "couldn't", False),
    ("should not", "shouldn't", False),
    ("cannot", "can't", False),
    ("is not", "isn't", False),
    ("are not", "aren't", False),
    ("was not", "wasn't", False),
    ("were not", "weren't", False),
    ("has not", "hasn't", False),
    ("have not", "haven't", False),
    ("it is", "it's", False),
    ("that is", "that's", False),
    ("there is", "there's", False),
    ("I am", "I'm", True),
    ("I have", "I've", True),
    ("I will", "I'll", True),
    ("you are", "you're", False),
    ("we are", "we're", False),
    ("they are", "they're", False),
    ("who is", "who's", False),
    ("what is", "what's", False),
    ("let us", "let's", False),
]

# (interjection, weight)
INTERJECTIONS = [
    ("Think about it.", 1.0),
    ("Pretty wild, right?", 1.0),
    ("Seriously.", 1.0),
    ("And here's the thing.", 1.0),
    ("No joke.", 1.0),
    ("For real.", 1.0),
    ("That's kinda huge.", 1.0),
    ("Wild, right?", 1.0),
    ("Makes you think.", 1.0),
    ("Not gonna lie.", 1.0),
    ("Crazy, right?", 1.0),
    ("Big deal.", 1.0),
    ("True story.", 1.0),
    ("Hard to ignore.", 1.0),
    ("Kinda scary, honestly.", 1.0),
]

"""
Quick-start presets and the bundled demo project.

Presets replace intent, claims and expressions wholesale, overlay their
LinkedIn options on the current ones, and jump straight to the draft phase.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from inkwise.state.sanitizer import IdFactory
from inkwise.state.schemas import SessionState
from inkwise.state.session import apply_patch
from inkwise.state.validator import ImportResult, extract_state_from_import
from inkwise.utils.id_generator import generate_claim_id


@dataclass(frozen=True)
class Preset:
    id: str
    label: str
    intent: str
    claims: List[str]
    expressions: List[str]
    linkedin: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "label": self.label, "intent": self.intent}


PRESETS: Dict[str, Preset] = {
    p.id: p
    for p in [
        Preset(
            id="systems_coordination",
            label="Systems: Coordination Tax",
            intent="If your system needs constant coordination to function, it’s already failing.",
            claims=[
                "Coordination feels productive, but it often signals fragility.",
                "Good systems degrade gracefully without heroics.",
                "The fix is ownership + interfaces, not more meetings.",
            ],
            expressions=[
                "Coordination can look like momentum because everyone is busy routing around gaps. But the busier the routing layer gets, the more you’re paying a hidden tax to keep the machine upright.",
                "Strong systems don’t require heroic people to keep them standing. They have clear handoffs, obvious defaults, and predictable failure modes, so output stays acceptable even when someone is out.",
                "The boring upgrade is the real one: assign an owner, define inputs/outputs, set a cadence, and write the “when this breaks” fallback. Meetings don’t scale. Interfaces do.",
            ],
            linkedin={"includeCTA": True, "ctaText": "Where do you see coordination masquerading as execution?"},
        ),
        Preset(
            id="sf_homeless_spend",
            label="Civic: Dollars → Outcomes",
            intent="The question isn’t moral. It’s mechanical: what happens to a dollar between appropriation and outcome?",
            claims=[
                "High spend doesn’t automatically produce visible results.",
                "Complexity can absorb resources before they reach outcomes.",
                "The right KPI is time-to-outcome, not dollars allocated.",
            ],
            expressions=[
                "You can pour real money into a problem and still have the street-level reality look unchanged. That doesn’t prove bad intent. It proves the system between funding and outcomes matters more than the funding itself.",
                "When a program becomes an ecosystem, complexity becomes a sponge. Layers of process, eligibility, handoffs, and vendors can absorb the value before it ever becomes a bed, a treatment slot, or a stabilized person.",
                "The metric that should scare you is time-to-outcome. How long from appropriation to a measurable change? If it’s measured in years, the system is optimized for throughput, not resolution.",
            ],
            linkedin={"includeBullets": True, "bulletIntro": "Three mechanical questions:", "maxBullets": 3},
        ),
        Preset(
            id="ai_energy_wall",
            label="AI: Inference Hits Infrastructure",
            intent="The bottleneck isn’t compute. It’s electricity.",
            claims=[
                "Training is a sprint; inference is a marathon through grids and permitting.",
                "Interconnection queues + transmission timelines are the real constraint.",
                "Winners will pair models with power strategy, not just GPUs.",
            ],
            expressions=[
                "Everyone debates chips and model capability. But deploying intelligence at scale means running inference constantly, and that load has to go through physical infrastructure.",
                "Interconnection queues, transmission buildout, and permitting timelines move on a multi-year clock. That clock doesn’t care how fast your model improves.",
                "The competitive edge won’t just be better models. It will be securing power, siting compute intelligently, and engineering reliability as a first-class product constraint.",
            ],
            linkedin={"includeBullets": True, "includeHashtags": True, "hashtags": "#ai #infrastructure #energy #datacenters"},
        ),
        Preset(
            id="travel_trust",
            label="Business: Trust > Hype (Travel)",
            intent="In travel, trust is the product. The itinerary is the delivery vehicle.",
            claims=[
                "People don’t buy trips; they buy certainty.",
                "Your system should reduce decisions, not add options.",
                "Overdeliver quietly: clear expectations, clean handoffs, fast fixes.",
            ],
            expressions=[
                "Most clients aren’t paying for flights and hotels. They’re paying to stop worrying. The real value is confidence: that someone competent is holding the details.",
                "A good travel workflow narrows choices into a few strong options with tradeoffs explained. Too many options feels like homework, not service.",
                "The brand is built in the moments that go wrong: quick rebooks, proactive updates, and calm accountability. Never oversell. Always overdeliver.",
            ],
            linkedin={"includeHashtags": True, "hashtags": "#customerservice #systems #travel", "includeSignature": True},
        ),
    ]
}


def preset_label(preset_id: str) -> str:
    preset = PRESETS.get(preset_id)
    return preset.label if preset else preset_id


def get_preset(preset_id: str) -> Optional[Preset]:
    return PRESETS.get(preset_id)


def apply_preset(
    state: SessionState,
    preset_id: str,
    id_factory: IdFactory = generate_claim_id,
) -> SessionState:
    """Load a preset into the session. Claim ids are generated fresh each time."""
    preset = PRESETS.get(preset_id)
    if preset is None:
        raise ValueError(f"Unknown preset: {preset_id}")

    claims = [{"id": id_factory(), "text": text} for text in preset.claims]
    expressions = {
        claim["id"]: preset.expressions[i] if i < len(preset.expressions) else ""
        for i, claim in enumerate(claims)
    }

    return apply_patch(
        state,
        {
            "intent": preset.intent,
            "claims": claims,
            "expressions": expressions,
            "linkedin": dict(preset.linkedin),
            "ui": {"presetId": preset.id},
            "phase": "draft",
        },
        id_factory,
    )


# =============================================================================
# DEMO PROJECT
# =============================================================================

DEMO_PROJECT: Dict[str, Any] = {
    "version": "inkwise:session:v1",
    "exportedAt": "2025-01-18T00:00:00.000Z",
    "state": {
        "phase": "expression",
        "intent": "Clear writing starts before the first sentence.",
        "claims": [
            {"id": "demo-claim-1", "text": "Decide the one thing the reader should remember."},
            {"id": "demo-claim-2", "text": "Order your points before you polish them."},
            {"id": "demo-claim-3", "text": "Every paragraph should earn its place."},
        ],
        "expressions": {
            "demo-claim-1": "If you can’t say the point in one sentence, the draft will wander. Write the sentence first and keep it visible while you work.",
            "demo-claim-2": "Structure is where most of the thinking happens. Once the claims are in order, the prose mostly writes itself.",
            "demo-claim-3": "Read each paragraph and ask which claim it supports. If the answer is none, cut it.",
        },
        "outputProfile": "linkedin",
        "ui": {"presetId": "systems_coordination"},
        "linkedin": {
            "hookOverride": "",
            "includeBullets": True,
            "bulletIntro": "Three habits:",
            "maxBullets": 3,
            "includeCTA": True,
            "ctaText": "What’s your first step before writing?",
            "includeHashtags": True,
            "hashtags": "#writing #communication",
            "includeSignature": False,
            "signature": "— Posted via Inkwise",
        },
    },
}


def load_demo_project() -> ImportResult:
    """Resolve the bundled demo through the same strict path as a file import."""
    return extract_state_from_import(DEMO_PROJECT)

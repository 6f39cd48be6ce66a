from .team_rules import (
    LONELINESS_THRESHOLD, OVERPOPULATION_THRESHOLD, BIRTH_THRESHOLD,
    TeamRuleParams, count_team,
    loneliness_rule, overpopulation_rule, team_change_rule, birth_rule,
    RULE_FACTORIES, build_rule, default_rules,
)

__all__ = [
    'LONELINESS_THRESHOLD', 'OVERPOPULATION_THRESHOLD', 'BIRTH_THRESHOLD',
    'TeamRuleParams', 'count_team',
    'loneliness_rule', 'overpopulation_rule', 'team_change_rule', 'birth_rule',
    'RULE_FACTORIES', 'build_rule', 'default_rules',
]

ALL_JURISDICTIONS = '*'

NATIONWIDE = 'USA'

STATE_ABBREVIATIONS = [
    'AB', 'AK', 'AL', 'AR', 'AZ', 'BC', 'CA', 'CO', 'CT', 'DC', 'DE', 'DP',
    'FL', 'FM', 'FO', 'GA', 'GU', 'GV', 'HI', 'IA', 'ID', 'IL', 'IN', 'KS',
    'KY', 'LA', 'MA', 'MB', 'MD', 'ME', 'MI', 'MN', 'MO', 'MP', 'MS', 'MT',
    'MX', 'NB', 'NC', 'ND', 'NE', 'NF', 'NH', 'NJ', 'NM', 'NS', 'NT', 'NV',
    'NY', 'OH', 'OK', 'ON', 'OR', 'PA', 'PE', 'PR', 'PW', 'QC', 'RI', 'SC',
    'SD', 'SK', 'TN', 'TX', 'UT', 'VA', 'VI', 'VT', 'WA', 'WI', 'WV', 'WY',
    'YT']

KNOWN_JURISDICTIONS = frozenset(STATE_ABBREVIATIONS + [NATIONWIDE])

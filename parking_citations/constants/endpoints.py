BROWARD_CLERK_LINK = 'https://api.browardclerk.org'

COLUMBUS_PD_URL = 'https://columbuspd.t2hosted.com'
EIU_PARKING_URL = 'https://eiuparking.t2hosted.com'
FORT_WAYNE_VIOLATIONS_URL = 'https://fortwayneviolations.t2hosted.com'
PACE_URL = 'https://pace.t2hosted.com'
UNLPTS_URL = 'https://unlpts.t2hosted.com'

NYC_OPEN_DATA_BASE_URL = 'https://data.cityofnewyork.us/resource'
NYC_OPEN_PARKING_AND_CAMERA_VIOLATIONS_DATASET = 'nc67-uf89'
NYC_OPEN_PARKING_AND_CAMERA_VIOLATIONS_LINK = (
    'https://data.cityofnewyork.us/City-Government/'
    'Open-Parking-and-Camera-Violations/nc67-uf89')

# diet_planner/generators/menu_catalog.py
"""
Static menu pools used by the plan generator and the no-repeat filter.
"""
from diet_planner.models import MealSlot

RICE_TYPES = ["현미밥", "잡곡밥", "귀리밥", "보리밥", "흑미밥", "기장밥"]
PROTEIN_MAINS = ["닭가슴살구이", "연어구이", "두부조림", "달걀찜", "흰살생선찜", "콩불고기"]
MEAT_MAINS = ["닭안심구이", "저지방 소고기볶음", "돼지안심수육"]
SOUPS = ["맑은채소국", "저염 된장국", "단호박수프", "들깨버섯수프", "두부맑은국", "미역국(저염)"]
SIDES = ["브로콜리찜", "버섯볶음", "시금치나물", "오이무침", "당근볶음", "애호박볶음"]
SNACKS = ["무가당 요거트", "바나나 반 개", "찐고구마", "두유", "사과 조각", "아몬드 소량"]
SNACK_FRUITS = ["사과 조각", "바나나 반 개", "배 조각", "키위", "딸기"]

BREAKFAST_MAIN_VARIANTS = ["달걀두부찜", "달걀찜", "두부조림", "닭안심찜", "닭가슴살구이", "연두부덮밥", "흰살생선찜", "부드러운 죽"]
LUNCH_MAIN_VARIANTS = ["연어구이", "닭가슴살구이", "두부조림", "닭안심찜", "흰살생선찜", "연두부덮밥", "고등어구이", "두부스테이크"]
DINNER_MAIN_VARIANTS = ["닭가슴살구이", "흰살생선찜", "두부조림", "연어구이", "닭안심찜", "부드러운 죽", "달걀두부찜", "고등어구이"]
SNACK_MAIN_VARIANTS = ["무가당 요거트", "그릭요거트", "무가당 두유", "찐고구마", "사과 조각", "바나나 반 개", "아몬드 소량", "베리류"]
SNACK_SIDE_VARIANTS = ["사과 조각", "바나나 반 개", "베리류", "키위", "딸기", "배 조각", "아몬드 소량", "호두 소량"]
SNACK_HYDRATION_VARIANTS = ["물", "따뜻한 물"]

MAIN_POOLS = {
    MealSlot.BREAKFAST: BREAKFAST_MAIN_VARIANTS,
    MealSlot.LUNCH: LUNCH_MAIN_VARIANTS,
    MealSlot.DINNER: DINNER_MAIN_VARIANTS,
    MealSlot.SNACK: SNACK_MAIN_VARIANTS,
}

SEASONAL_FOOD = {
    1: ["배추", "무", "시금치"],
    2: ["브로콜리", "당근", "양배추"],
    3: ["달래", "냉이", "두릅"],
    4: ["아스파라거스", "미나리", "쑥"],
    5: ["오이", "상추", "완두콩"],
    6: ["애호박", "가지", "토마토"],
    7: ["옥수수", "오이", "복숭아"],
    8: ["가지", "토마토", "자두"],
    9: ["버섯", "배", "고구마"],
    10: ["단호박", "무", "사과"],
    11: ["브로콜리", "배추", "감"],
    12: ["무", "양배추", "귤"],
}
DEFAULT_SEASONAL = ["채소"]

# Names users commonly type when logging off-plan food
COMMON_FOOD_CANDIDATES = [
    "현미밥", "잡곡밥", "죽", "오트밀", "닭가슴살", "연어구이", "흰살생선찜", "두부조림",
    "달걀찜", "브로콜리찜", "당근볶음", "양배추볶음", "버섯볶음", "시금치나물", "오이무침",
    "채소수프", "된장국", "미역국", "콩나물국", "샐러드", "그릭요거트", "무가당 요거트",
    "두유", "바나나", "사과", "배", "키위", "오렌지", "오렌지주스", "토마토", "고구마",
    "감자", "견과류", "치킨", "후라이드치킨", "양념치킨", "간장치킨", "닭강정", "치킨너겟",
    "피자", "치즈피자", "페퍼로니피자", "불고기피자", "햄버거", "치즈버거", "감자튀김",
    "핫도그", "떡볶이", "라볶이", "순대", "튀김", "김밥", "참치김밥", "라면", "짜장면",
    "짬뽕", "우동", "파스타", "스파게티", "돈가스", "제육볶음", "불고기", "삼겹살", "족발",
    "보쌈", "아이스크림", "초콜릿", "쿠키", "케이크", "도넛", "빵", "크로와상", "와플",
    "붕어빵", "과자", "젤리", "콜라", "사이다", "탄산음료", "밀크티", "버블티", "커피",
    "라떼", "카페라떼", "아메리카노", "보리차", "카모마일차", "루이보스차", "페퍼민트차",
    "생강차", "레몬밤차", "주스", "맥주", "소주", "와인",
]

"""Bundled demo series shown before a file is uploaded."""

SAMPLE_CSV = """Date,Value,Index
2024/09/30,"31,250,000","5,762.48"
2024/10/01,"31,180,000","5,708.75"
2024/10/15,"31,940,000","5,859.85"
2024/10/31,"31,420,000","5,705.45"
2024/11/01,"31,510,000","5,728.80"
2024/11/15,"32,360,000","5,870.62"
2024/11/29,"33,050,000","6,032.38"
2024/12/02,"33,120,000","6,047.15"
2024/12/16,"34,010,000","6,074.08"
2024/12/23,"33,870,000","5,974.07"
2024/12/24,"34,060,000","6,040.04"
2024/12/26,"34,020,000","6,037.59"
2024/12/27,"33,640,000","5,970.84"
2024/12/30,"33,390,000","5,906.94"
2024/12/31,"35,000,000","5,881.63"
"""

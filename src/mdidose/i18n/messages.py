"""Message catalogues for every key emitted by the dosing core."""

from typing import Dict

SUPPORTED_LANGUAGES = ("en", "es")

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        # generate_warnings()
        "warnings.hypoglycemia": "HYPOGLYCEMIA: Treat immediately with 15g fast carbohydrates",
        "warnings.high_iob_low_glucose": "High IOB with low glucose: consider snack without insulin",
        "warnings.very_high_glucose": "Very high glucose: check ketones (urine or blood)",
        "warnings.carbs_without_insulin": (
            "Carbohydrates will be consumed without insulin. High IOB compensating."
        ),
        "warnings.high_nocturnal_dose": (
            "High nocturnal dose: risk of hypoglycemia. Consider reducing."
        ),
        "warnings.very_high_dose": "Very high dose (>15U): verify calculation and context",
        "warnings.recent_exercise": "Recent exercise: dose reduced. Monitor glucose frequently.",
        "warnings.alcohol": "Alcohol consumption: increased risk of delayed hypoglycemia (up to 24h)",
        "warnings.high_fat_meal": (
            "High-fat meal: slow absorption. Consider splitting the dose, "
            "60% now and 40% in 2-3h if necessary."
        ),
        "warnings.illness": "Illness: could affect insulin sensitivity. Dose adjusted by +20%",
        "warnings.stress": "Stress: could affect insulin sensitivity. Dose adjusted by +10%",
        "warnings.menstruation": (
            "Menstruation: could affect insulin sensitivity. Dose adjusted by +10%"
        ),
        # evaluate_pre_sleep()
        "pre_sleep.risk_nocturnal_hypo": (
            "Risk of nocturnal hypoglycemia. Consume {carbohydrates}g of carbohydrates."
        ),
        "pre_sleep.very_high_glucose": "Very high glucose. Check ketones if it persists.",
        "pre_sleep.monitor_trend": "Consider a measurement at 3 AM to check the trend.",
        # calculate_between_meal_correction()
        "correction.wait_3_hours": (
            "Wait at least 3 hours since the last dose ({hours} hours have passed)"
        ),
        "correction.conservative_correction": (
            "Conservative correction (50% of calculated). Current IOB: {iob}U"
        ),
        "correction.check_glucose": "Check glucose in 2 hours",
        "correction.no_correction_needed": (
            "No correction required. Glucose in range or IOB sufficient."
        ),
        # generate_adjustment_recommendation()
        "validation.urgent_adjustment": (
            "URGENT ADJUSTMENT: Too many hypoglycemias ({hypo_rate}%). "
            "Reduce doses or adjust parameters with your doctor immediately."
        ),
        "validation.caution": (
            "CAUTION: Elevated hypoglycemia rate ({hypo_rate}%). "
            "Consider a 10-15% dose reduction with medical supervision."
        ),
        "validation.review_poor_control": (
            "REVIEW: Only {percentage_range}% days in range. Review carb counting, "
            "ISF/IC Ratio parameters, and schedule consistency."
        ),
        "validation.review_poor_control_hyper": (
            "REVIEW: Only {percentage_range}% days in range with {hyper_rate}% hyperglycemias. "
            "Consider a gradual dose increase with medical supervision."
        ),
        "validation.optimize": (
            "OPTIMIZE: {percentage_range}% days in range. Frequent hyperglycemias ({hyper_rate}%). "
            "Consider fine-tuning IC Ratios by time of day."
        ),
        "validation.continue": (
            "CONTINUE: {percentage_range}% days in range. Acceptable performance but can improve. "
            "Maintain detailed logging and look for patterns."
        ),
        "validation.excellent": (
            "EXCELLENT: {percentage_range}% days in range, no hypoglycemias, minimal "
            "hyperglycemias. Model functioning optimally."
        ),
        "validation.model_working": (
            "MODEL WORKING WELL: {percentage_range}% days in range with minimal hypoglycemias "
            "({hypo_rate}%). Maintain current parameters."
        ),
        "validation.continue_monitoring": (
            "CONTINUE MONITORING: Performance within goals. Maintain logging and review monthly."
        ),
        "validation.insufficient_data": (
            "INSUFFICIENT DATA: No glucose records were provided for the validation window."
        ),
        # analyze_patterns()
        "patterns.recurring_hypos": "Recurring hypoglycemias in the {time_desc} (hour {hour}:00)",
        "patterns.suggest_reduce_dose": (
            "Reduce the dose prior to {hour}:00 or increase carbohydrates without increasing insulin"
        ),
        "patterns.consistent_hyper": (
            "Consistent hyperglycemias around {hour}:00 (average: {average} mg/dL)"
        ),
        "patterns.suggest_increase_dose": "Increase the dose prior to {hour}:00 or adjust the IC Ratio",
        "patterns.high_variability": "High glucose variability (SD: {standard_deviation} mg/dL)",
        "patterns.suggest_consistency": (
            "Improve consistency in meal timing, carb counting and dose timing"
        ),
        "patterns.no_patterns": "No consistent problematic patterns detected",
        "patterns.time.morning": "morning",
        "patterns.time.midday": "midday",
        "patterns.time.afternoon": "afternoon",
        "patterns.time.night": "night",
        # calculate_dose()
        "dose.reduced_by_factors": "Dose reduced {reduction}% by safety factors",
    },
    "es": {
        "warnings.hypoglycemia": "HIPOGLUCEMIA: Tratar inmediatamente con 15g de carbohidratos rápidos",
        "warnings.high_iob_low_glucose": "IOB alto con glucosa baja: considerar snack sin insulina",
        "warnings.very_high_glucose": "Glucosa muy alta: verificar cetonas (orina o sangre)",
        "warnings.carbs_without_insulin": (
            "Se consumirán carbohidratos sin insulina. IOB alto compensando."
        ),
        "warnings.high_nocturnal_dose": (
            "Dosis nocturna alta: riesgo de hipoglucemia. Considerar reducir."
        ),
        "warnings.very_high_dose": "Dosis muy alta (>15U): verificar cálculo y contexto",
        "warnings.recent_exercise": (
            "Ejercicio reciente: dosis reducida. Monitorear glucosa frecuentemente."
        ),
        "warnings.alcohol": (
            "Consumo de alcohol: mayor riesgo de hipoglucemia tardía (hasta 24h)"
        ),
        "warnings.high_fat_meal": (
            "Comida alta en grasa: absorción lenta. Considerar dividir la dosis, "
            "60% ahora y 40% en 2-3h si es necesario."
        ),
        "warnings.illness": (
            "Enfermedad: podría afectar la sensibilidad a la insulina. Dosis ajustada +20%"
        ),
        "warnings.stress": (
            "Estrés: podría afectar la sensibilidad a la insulina. Dosis ajustada +10%"
        ),
        "warnings.menstruation": (
            "Menstruación: podría afectar la sensibilidad a la insulina. Dosis ajustada +10%"
        ),
        "pre_sleep.risk_nocturnal_hypo": (
            "Riesgo de hipoglucemia nocturna. Consumir {carbohydrates}g de carbohidratos."
        ),
        "pre_sleep.very_high_glucose": "Glucosa muy alta. Verificar cetonas si persiste.",
        "pre_sleep.monitor_trend": "Considerar medición a las 3 AM para verificar tendencia.",
        "correction.wait_3_hours": (
            "Esperar al menos 3 horas desde la última dosis ({hours} horas han pasado)"
        ),
        "correction.conservative_correction": (
            "Corrección conservadora (50% de la calculada). IOB actual: {iob}U"
        ),
        "correction.check_glucose": "Verificar glucosa en 2 horas",
        "correction.no_correction_needed": (
            "No se requiere corrección. Glucosa en rango o IOB suficiente."
        ),
        "validation.urgent_adjustment": (
            "AJUSTE URGENTE: Demasiadas hipoglucemias ({hypo_rate}%). "
            "Reducir dosis o ajustar parámetros con el médico inmediatamente."
        ),
        "validation.caution": (
            "PRECAUCIÓN: Tasa elevada de hipoglucemias ({hypo_rate}%). "
            "Considerar reducción de dosis del 10-15% con supervisión médica."
        ),
        "validation.review_poor_control": (
            "REVISAR: Solo {percentage_range}% días en rango. Revisar conteo de carbohidratos, "
            "parámetros ISF/IC Ratio y consistencia del horario."
        ),
        "validation.review_poor_control_hyper": (
            "REVISAR: Solo {percentage_range}% días en rango con {hyper_rate}% hiperglucemias. "
            "Considerar aumento gradual de dosis con supervisión médica."
        ),
        "validation.optimize": (
            "OPTIMIZAR: {percentage_range}% días en rango. Hiperglucemias frecuentes "
            "({hyper_rate}%). Considerar ajuste fino de IC Ratios por hora del día."
        ),
        "validation.continue": (
            "CONTINUAR: {percentage_range}% días en rango. Rendimiento aceptable pero puede "
            "mejorar. Mantener registro detallado y buscar patrones."
        ),
        "validation.excellent": (
            "EXCELENTE: {percentage_range}% días en rango, sin hipoglucemias, hiperglucemias "
            "mínimas. Modelo funcionando óptimamente."
        ),
        "validation.model_working": (
            "MODELO FUNCIONANDO BIEN: {percentage_range}% días en rango con hipoglucemias "
            "mínimas ({hypo_rate}%). Mantener parámetros actuales."
        ),
        "validation.continue_monitoring": (
            "CONTINUAR MONITOREO: Rendimiento dentro de objetivos. Mantener registro y "
            "revisar mensualmente."
        ),
        "validation.insufficient_data": (
            "DATOS INSUFICIENTES: No se recibieron registros de glucosa para la validación."
        ),
        "patterns.recurring_hypos": "Hipoglucemias recurrentes en la {time_desc} (hora {hour}:00)",
        "patterns.suggest_reduce_dose": (
            "Reducir dosis antes de las {hour}:00 o aumentar carbohidratos sin aumentar insulina"
        ),
        "patterns.consistent_hyper": (
            "Hiperglucemias consistentes alrededor de las {hour}:00 (promedio: {average} mg/dL)"
        ),
        "patterns.suggest_increase_dose": "Aumentar dosis antes de las {hour}:00 o ajustar IC Ratio",
        "patterns.high_variability": "Alta variabilidad de glucosa (DE: {standard_deviation} mg/dL)",
        "patterns.suggest_consistency": (
            "Mejorar consistencia en horarios de comida, conteo de carbohidratos y horarios de dosis"
        ),
        "patterns.no_patterns": "No se detectaron patrones problemáticos consistentes",
        "patterns.time.morning": "mañana",
        "patterns.time.midday": "mediodía",
        "patterns.time.afternoon": "tarde",
        "patterns.time.night": "noche",
        "dose.reduced_by_factors": "Dosis reducida {reduction}% por factores de seguridad",
    },
}
